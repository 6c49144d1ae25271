"""Central constants shared across the ingestion/search stack."""

from typing import Final

# Payload keys written for every chunk point.
K_TEXT: Final[str] = "text"
K_SOURCE: Final[str] = "source"
K_CHUNK_INDEX: Final[str] = "chunk_index"
K_START_CHAR: Final[str] = "start_char"
K_END_CHAR: Final[str] = "end_char"

# Payload keys read as fallbacks when formatting foreign collections.
K_CONTENT: Final[str] = "content"
K_METADATA: Final[str] = "metadata"

NO_RESULTS_MESSAGE: Final[str] = "No results found."
