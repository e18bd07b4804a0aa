"""Document Q&A retrieval and answering backend."""

__version__ = "0.1.0"
