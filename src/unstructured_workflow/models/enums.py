"""Closed string enumerations used across the API."""

from __future__ import annotations

from enum import Enum


class ConnectorType(str, Enum):
    """Wire discriminators for source and destination connectors."""

    ASTRADB = "astradb"
    AZURE_AI_SEARCH = "azure_ai_search"
    AZURE = "azure"
    BOX = "box"
    CONFLUENCE = "confluence"
    COUCHBASE = "couchbase"
    DATABRICKS_VOLUMES = "databricks_volumes"
    DATABRICKS_VOLUME_DELTA_TABLES = "databricks_volume_delta_tables"
    DELTA_TABLE = "delta_table"
    DROPBOX = "dropbox"
    ELASTICSEARCH = "elasticsearch"
    GCS = "gcs"
    GOOGLE_DRIVE = "google_drive"
    JIRA = "jira"
    KAFKA_CLOUD = "kafka-cloud"
    MILVUS = "milvus"
    MONGODB = "mongodb"
    MOTHERDUCK = "motherduck"
    NEO4J = "neo4j"
    ONEDRIVE = "onedrive"
    OUTLOOK = "outlook"
    PINECONE = "pinecone"
    POSTGRES = "postgres"
    QDRANT_CLOUD = "qdrant-cloud"
    REDIS = "redis"
    S3 = "s3"
    SALESFORCE = "salesforce"
    SHAREPOINT = "sharepoint"
    SLACK = "slack"
    SNOWFLAKE = "snowflake"
    WEAVIATE_CLOUD = "weaviate-cloud"
    ZENDESK = "zendesk"
    IBM_WATSONX_S3 = "ibm_watsonx_s3"


class ConnectionCheckStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


# Workflows


class WorkflowType(str, Enum):
    BASIC = "basic"
    ADVANCED = "advanced"
    PLATINUM = "platinum"
    CUSTOM = "custom"


class WorkflowState(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Jobs


class JobStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    STOPPED = "STOPPED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.STOPPED, JobStatus.FAILED)


class JobProcessingStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    SUCCESS = "SUCCESS"
    COMPLETED_WITH_ERRORS = "COMPLETED_WITH_ERRORS"
    STOPPED = "STOPPED"
    FAILED = "FAILED"


class WorkflowJobType(str, Enum):
    EPHEMERAL = "ephemeral"
    PERSISTENT = "persistent"
    SCHEDULED = "scheduled"


# Workflow nodes


class NodeType(str, Enum):
    """Node families as they appear in the envelope ``type`` field."""

    PARTITION = "partition"
    CHUNK = "chunk"
    EMBED = "embed"
    ENRICH = "prompter"


class PartitionerStrategy(str, Enum):
    AUTO = "auto"
    VLM = "vlm"
    HI_RES = "hi_res"
    FAST = "fast"


class ChunkerSubtype(str, Enum):
    CHARACTER = "chunk_by_character"
    TITLE = "chunk_by_title"
    PAGE = "chunk_by_page"
    SIMILARITY = "chunk_by_similarity"


class EmbedderSubtype(str, Enum):
    AZURE_OPENAI = "azure_openai"
    BEDROCK = "bedrock"
    TOGETHERAI = "togetherai"
    VOYAGEAI = "voyageai"


class EmbedderModel(str, Enum):
    # Azure OpenAI
    AZURE_OPENAI_TEXT_EMBEDDING_3_SMALL = "text-embedding-3-small"
    AZURE_OPENAI_TEXT_EMBEDDING_3_LARGE = "text-embedding-3-large"
    AZURE_OPENAI_TEXT_EMBEDDING_ADA_002 = "text-embedding-ada-002"
    # Bedrock
    BEDROCK_TITAN_EMBED_TEXT_V2 = "amazon.titan-embed-text-v2:0"
    BEDROCK_TITAN_EMBED_TEXT_V1 = "amazon.titan-embed-text-v1"
    BEDROCK_TITAN_EMBED_IMAGE_V1 = "amazon.titan-embed-image-v1"
    BEDROCK_COHERE_EMBED_ENGLISH = "cohere.embed-english-v3"
    BEDROCK_COHERE_EMBED_MULTILINGUAL = "cohere.embed-multilingual-v3"
    # TogetherAI
    TOGETHERAI_M2_BERT_80M_32K_RETRIEVAL = "togethercomputer/m2-bert-80M-32k-retrieval"
    # VoyageAI
    VOYAGEAI_3 = "voyage-3"
    VOYAGEAI_3_LARGE = "voyage-3-large"
    VOYAGEAI_3_LITE = "voyage-3-lite"
    VOYAGEAI_CODE_3 = "voyage-code-3"
    VOYAGEAI_FINANCE_2 = "voyage-finance-2"
    VOYAGEAI_LAW_2 = "voyage-law-2"
    VOYAGEAI_CODE_2 = "voyage-code-2"
    VOYAGEAI_MULTIMODAL_3 = "voyage-multimodal-3"


class EnrichmentType(str, Enum):
    IMAGE_OPENAI = "openai_image_description"
    TABLE_OPENAI = "openai_table_description"
    TABLE2HTML_OPENAI = "openai_table2html"
    NER_OPENAI = "openai_ner"

    IMAGE_ANTHROPIC = "anthropic_image_description"
    TABLE_ANTHROPIC = "anthropic_table_description"
    NER_ANTHROPIC = "anthropic_ner"

    IMAGE_BEDROCK = "bedrock_image_description"
    TABLE_BEDROCK = "bedrock_table_description"


class Provider(str, Enum):
    """Model providers for VLM partitioning."""

    AUTO = "auto"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    BEDROCK = "bedrock"


class Model(str, Enum):
    """Models for VLM partitioning."""

    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    CLAUDE_3_5_SONNET = "claude-3-5-sonnet-20241022"
    CLAUDE_3_7_SONNET = "claude-3-7-sonnet-20250219"
    BEDROCK_NOVA_LITE = "us.amazon.nova-lite-v1:0"
    BEDROCK_NOVA_PRO = "us.amazon.nova-pro-v1:0"
    BEDROCK_CLAUDE_3_OPUS = "us.anthropic.claude-3-opus-20240229-v1:0"
    BEDROCK_CLAUDE_3_HAIKU = "us.anthropic.claude-3-haiku-20240307-v1:0"
    BEDROCK_CLAUDE_3_SONNET = "us.anthropic.claude-3-sonnet-20240229-v1:0"
    BEDROCK_CLAUDE_3_5_SONNET = "us.anthropic.claude-3-5-sonnet-20241022-v2:0"
    BEDROCK_LLAMA_3_2_11B = "us.meta.llama3-2-11b-instruct-v1:0"
    BEDROCK_LLAMA_3_2_90B = "us.meta.llama3-2-90b-instruct-v1:0"


class OutputFormat(str, Enum):
    HTML = "text/html"
    JSON = "application/json"


class ExcludableElement(str, Enum):
    FIGURE_CAPTION = "FigureCaption"
    NARRATIVE_TEXT = "NarrativeText"
    LIST_ITEM = "ListItem"
    TITLE = "Title"
    ADDRESS = "Address"
    TABLE = "Table"
    PAGE_BREAK = "PageBreak"
    HEADER = "Header"
    FOOTER = "Footer"
    UNCATEGORIZED_TEXT = "UncategorizedText"
    IMAGE = "Image"
    FORMULA = "Formula"
    EMAIL_ADDRESS = "EmailAddress"


class BlockType(str, Enum):
    IMAGE = "Image"
    TABLE = "Table"


class Encoding(str, Enum):
    UTF_8 = "utf_8"
    ISO_8859_1 = "iso_8859_1"
    ISO_8859_6 = "iso_8859_6"
    ISO_8859_8 = "iso_8859_8"
    ASCII = "ascii"
    BIG5 = "big5"
    UTF_16 = "utf_16"
    UTF_16_BE = "utf_16_be"
    UTF_16_LE = "utf_16_le"
    UTF_32 = "utf_32"
    UTF_32_BE = "utf_32_be"
    UTF_32_LE = "utf_32_le"
    EUC_JIS_2004 = "euc_jis_2004"
    EUC_JISX0213 = "euc_jisx0213"
    EUC_JP = "euc_jp"
    EUC_KR = "euc_kr"
    GB18030 = "gb18030"
    SHIFT_JIS = "shift_jis"
    SHIFT_JIS_2004 = "shift_jis_2004"
    SHIFT_JISX0213 = "shift_jisx0213"


def canonical_encoding(name: str) -> str:
    """Normalize an encoding name: lowercase, dashes, ISO ``-i``/``-e`` suffix dropped.

    >>> canonical_encoding(" ISO_8859_6_I ")
    'iso-8859-6'
    """
    s = name.strip().lower().replace("_", "-")
    if s in ("iso-8859-6-i", "iso-8859-8-i", "iso-8859-6-e", "iso-8859-8-e"):
        s = s[:-2]
    return s
