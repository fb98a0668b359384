"""Personal Blog: персональный блог с черновиками, тегами и поиском."""

__version__ = "1.0.0"
