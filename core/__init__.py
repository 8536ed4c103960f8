"""
core/ - Core business logic for the NayaVed consultation engine
================================================================

This package contains the main components:
- models.py: Knowledge records, search results and chat messages
- corpus.py: Read-only store of the four bundled corpora
- query.py: Tokenizing and synonym expansion
- scoring.py: Per-corpus relevance scoring
- fusion.py: Cross-corpus ranking (search entry point)
- synthesizer.py: Template answers built from ranked results
- history.py: Append-only session history
- service.py: Orchestrator that ties everything together
"""
