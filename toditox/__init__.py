"""
TODITOX - notes-to-tasks extraction

Turns meeting notes, voice memos and chat dumps into typed records
(tasks, project updates, milestones) ready for the storage layer.

Architecture:
- Extraction Context: deterministic grammar parsing, classification,
  pattern fallback and result normalization
- Generation Context: calls to an external text-generation service under
  fixed instruction contracts
"""

__version__ = "0.1.0"
