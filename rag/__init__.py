"""
rag/ - Remote generation for the NayaVed consultation engine.

chat_engine.py wraps the OpenAI chat-completions call used when a remote
model is configured.
"""
