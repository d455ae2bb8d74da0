"""System-wide constants."""

# Metadata field carrying the document day as epoch milliseconds (UTC).
DATE_FIELD = "date_ts"

# Metadata field used for citations.
SOURCE_FIELD = "source"

CONTEXT_SEPARATOR = "\n\n---\n\n"

NO_DOCUMENTS_ANSWER = "The context has no matching documents."

TIKTOKEN_ENCODING = "cl100k_base"

DATE_FORMAT = "%Y-%m-%d"

MS_PER_SECOND = 1000
