"""Source and destination connector configurations.

Every connector kind is one model class carrying its wire discriminator in
``connector_type``. Kinds that can act both as a source and as a destination
(S3, GCS, Postgres, ...) are a single class registered in both registries.

Fields the API requires default to their zero value (``""``, ``0``, ``[]``)
and are always sent, so an empty ``config`` object still decodes. Optional
fields default to ``None`` and are omitted until set.
"""

from typing import ClassVar

from pydantic import Field

from unstructured_workflow.models.base import WireModel
from unstructured_workflow.models.enums import ConnectorType
from unstructured_workflow.models.registry import VariantRegistry


class ConnectorConfig(WireModel):
    """Base for all connector configurations."""

    connector_type: ClassVar[str]

    def type(self) -> str:
        """Wire discriminator for this configuration."""
        return self.connector_type


class SourceConfig(ConnectorConfig):
    """A configuration usable by a source connector."""


class DestinationConfig(ConnectorConfig):
    """A configuration usable by a destination connector."""


# Shared by sources and destinations


class S3ConnectorConfig(SourceConfig, DestinationConfig):
    """Amazon S3 or any S3-compatible object store."""

    connector_type: ClassVar[str] = ConnectorType.S3.value

    remote_url: str = ""
    anonymous: bool | None = None
    key: str | None = None
    secret: str | None = None
    token: str | None = None
    endpoint_url: str | None = None
    recursive: bool | None = None


class GCSConnectorConfig(SourceConfig, DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.GCS.value

    remote_url: str = ""
    service_account_key: str = ""
    recursive: bool | None = None


class PostgresConnectorConfig(SourceConfig, DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.POSTGRES.value

    host: str = ""
    database: str = ""
    port: int = 0
    username: str = ""
    password: str = ""
    table_name: str = ""
    batch_size: int = 0
    id_column: str | None = None
    fields: list[str] | None = None


class SnowflakeConnectorConfig(SourceConfig, DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.SNOWFLAKE.value

    account: str = ""
    role: str = ""
    user: str = ""
    password: str = ""
    host: str = ""
    port: int | None = None
    database: str = ""
    schema_: str | None = Field(None, alias="schema")
    table_name: str | None = None
    batch_size: int | None = None
    id_column: str | None = None
    fields: list[str] | None = None
    record_id_key: str | None = None


class CouchbaseConnectorConfig(SourceConfig, DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.COUCHBASE.value

    bucket: str = ""
    connection_string: str = ""
    scope: str | None = None
    collection: str | None = None
    batch_size: int = 0
    username: str = ""
    password: str = ""
    collection_id: str | None = None


class ElasticsearchConnectorConfig(SourceConfig, DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.ELASTICSEARCH.value

    hosts: list[str] = Field(default_factory=list)
    index_name: str = ""
    es_api_key: str = ""


class MongoDBConnectorConfig(SourceConfig, DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.MONGODB.value

    database: str = ""
    collection: str = ""
    uri: str = ""


class OneDriveConnectorConfig(SourceConfig, DestinationConfig):
    """OneDrive through the Microsoft Graph API."""

    connector_type: ClassVar[str] = ConnectorType.ONEDRIVE.value

    client_id: str = ""
    user_pname: str = ""
    tenant: str = ""
    authority_url: str = ""
    client_cred: str = ""
    recursive: bool | None = None
    path: str | None = None
    remote_url: str | None = None


class DatabricksVolumesConnectorConfig(SourceConfig, DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.DATABRICKS_VOLUMES.value

    host: str = ""
    catalog: str = ""
    schema_: str | None = Field(None, alias="schema")
    volume: str = ""
    volume_path: str = ""
    client_secret: str = ""
    client_id: str = ""


class KafkaCloudConnectorConfig(SourceConfig, DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.KAFKA_CLOUD.value

    bootstrap_servers: str = ""
    port: int | None = None
    group_id: str | None = None
    topic: str = ""
    kafka_api_key: str = ""
    secret: str = ""
    num_messages_to_consume: int | None = None
    batch_size: int | None = None


# Sources only


class AzureSourceConnectorConfig(SourceConfig):
    """Azure Blob Storage. Authenticate with a connection string, account key or SAS token."""

    connector_type: ClassVar[str] = ConnectorType.AZURE.value

    remote_url: str = ""
    account_name: str | None = None
    account_key: str | None = None
    connection_string: str | None = None
    sas_token: str | None = None
    recursive: bool = False


class BoxSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.BOX.value

    box_app_config: str = ""
    recursive: bool = False


class ConfluenceSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.CONFLUENCE.value

    url: str = ""
    username: str = ""
    password: str | None = None
    api_token: str | None = None
    token: str | None = None
    cloud: bool = False
    extract_images: bool | None = None
    extract_files: bool | None = None
    max_num_of_spaces: int = 0
    max_num_of_docs_from_each_space: int = 0
    spaces: list[str] = Field(default_factory=list)


class DropboxSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.DROPBOX.value

    token: str = ""
    remote_url: str = ""
    recursive: bool = False


class GoogleDriveSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.GOOGLE_DRIVE.value

    drive_id: str = ""
    service_account_key: str = ""
    extensions: list[str] | None = None
    recursive: bool = False


class JiraSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.JIRA.value

    url: str = ""
    username: str = ""
    password: str | None = None
    token: str | None = None
    cloud: bool | None = None
    projects: list[str] | None = None
    boards: list[str] | None = None
    issues: list[str] | None = None
    status_filters: list[str] | None = None
    download_attachments: bool | None = None


class OutlookSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.OUTLOOK.value

    authority_url: str | None = None
    tenant: str | None = None
    client_id: str = ""
    client_cred: str = ""
    outlook_folders: list[str] | None = None
    recursive: bool = False
    user_email: str = ""


class SalesforceSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.SALESFORCE.value

    username: str = ""
    consumer_key: str = ""
    private_key: str = ""
    categories: list[str] = Field(default_factory=list)


class SharePointSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.SHAREPOINT.value

    site: str = ""
    tenant: str = ""
    authority_url: str | None = None
    user_pname: str = ""
    client_id: str = ""
    client_cred: str = ""
    recursive: bool = False
    path: str | None = None


class SlackSourceConnectorConfig(SourceConfig):
    """Slack channels, optionally limited to a date range."""

    connector_type: ClassVar[str] = ConnectorType.SLACK.value

    channels: list[str] = Field(default_factory=list)
    start_date: str | None = None
    end_date: str | None = None
    token: str = ""


class ZendeskSourceConnectorConfig(SourceConfig):
    connector_type: ClassVar[str] = ConnectorType.ZENDESK.value

    subdomain: str = ""
    email: str = ""
    api_token: str = ""
    item_type: str | None = None
    batch_size: int | None = None


# Destinations only


class AstraDBConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.ASTRADB.value

    collection_name: str = ""
    keyspace: str | None = None
    batch_size: int | None = None
    api_endpoint: str = ""
    token: str = ""
    flatten_metadata: bool | None = None


class AzureAISearchConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.AZURE_AI_SEARCH.value

    endpoint: str = ""
    index: str = ""
    key: str = ""


class DatabricksVDTDestinationConnectorConfig(DestinationConfig):
    """Databricks volume delta tables. Authenticate with a token or a client id/secret pair."""

    connector_type: ClassVar[str] = ConnectorType.DATABRICKS_VOLUME_DELTA_TABLES.value

    server_hostname: str = ""
    http_path: str = ""
    token: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    catalog: str = ""
    database: str | None = None
    table_name: str | None = None
    schema_: str | None = Field(None, alias="schema")
    volume: str = ""
    volume_path: str | None = None


class DeltaTableConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.DELTA_TABLE.value

    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = ""
    table_uri: str = ""


class MilvusDestinationConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.MILVUS.value

    uri: str = ""
    user: str | None = None
    token: str | None = None
    password: str | None = None
    db_name: str | None = None
    collection_name: str = ""
    record_id_key: str = ""


class MotherduckDestinationConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.MOTHERDUCK.value

    account: str = ""
    role: str = ""
    user: str = ""
    password: str = ""
    host: str = ""
    port: int | None = None
    database: str = ""
    schema_: str | None = Field(None, alias="schema")
    table_name: str | None = None
    batch_size: int | None = None
    record_id_key: str | None = None


class Neo4jDestinationConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.NEO4J.value

    uri: str = ""
    database: str = ""
    username: str = ""
    password: str = ""
    batch_size: int | None = None


class PineconeDestinationConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.PINECONE.value

    index_name: str = ""
    api_key: str = ""
    namespace: str = ""
    batch_size: int | None = None


class RedisDestinationConnectorConfig(DestinationConfig):
    """Redis, addressed either by host/port or by a full URI."""

    connector_type: ClassVar[str] = ConnectorType.REDIS.value

    host: str = ""
    port: int | None = None
    username: str | None = None
    password: str | None = None
    uri: str | None = None
    database: int | None = None
    ssl: bool | None = None
    batch_size: int | None = None


class QdrantCloudDestinationConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.QDRANT_CLOUD.value

    url: str = ""
    api_key: str = ""
    collection_name: str = ""
    batch_size: int | None = None


class WeaviateDestinationConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.WEAVIATE_CLOUD.value

    cluster_url: str = ""
    api_key: str = ""
    collection: str | None = None


class IBMWatsonxS3DestinationConnectorConfig(DestinationConfig):
    connector_type: ClassVar[str] = ConnectorType.IBM_WATSONX_S3.value

    iam_api_key: str = ""
    access_key_id: str = ""
    secret_access_key: str = ""
    iceberg_endpoint: str = ""
    object_storage_endpoint: str = ""
    object_storage_region: str = ""
    catalog: str = ""
    max_retries_connection: int | None = None
    namespace: str = ""
    table: str = ""
    max_retries: int | None = None
    record_id_key: str | None = None


# Registries

SOURCES: VariantRegistry[type[SourceConfig]] = VariantRegistry("source")
DESTINATIONS: VariantRegistry[type[DestinationConfig]] = VariantRegistry("destination")

_SOURCE_VARIANTS: tuple[type[SourceConfig], ...] = (
    AzureSourceConnectorConfig,
    BoxSourceConnectorConfig,
    ConfluenceSourceConnectorConfig,
    CouchbaseConnectorConfig,
    DatabricksVolumesConnectorConfig,
    DropboxSourceConnectorConfig,
    ElasticsearchConnectorConfig,
    GCSConnectorConfig,
    GoogleDriveSourceConnectorConfig,
    JiraSourceConnectorConfig,
    KafkaCloudConnectorConfig,
    MongoDBConnectorConfig,
    OneDriveConnectorConfig,
    OutlookSourceConnectorConfig,
    PostgresConnectorConfig,
    S3ConnectorConfig,
    SalesforceSourceConnectorConfig,
    SharePointSourceConnectorConfig,
    SlackSourceConnectorConfig,
    SnowflakeConnectorConfig,
    ZendeskSourceConnectorConfig,
)

_DESTINATION_VARIANTS: tuple[type[DestinationConfig], ...] = (
    AstraDBConnectorConfig,
    AzureAISearchConnectorConfig,
    CouchbaseConnectorConfig,
    DatabricksVolumesConnectorConfig,
    DatabricksVDTDestinationConnectorConfig,
    DeltaTableConnectorConfig,
    ElasticsearchConnectorConfig,
    GCSConnectorConfig,
    KafkaCloudConnectorConfig,
    MilvusDestinationConnectorConfig,
    MongoDBConnectorConfig,
    MotherduckDestinationConnectorConfig,
    Neo4jDestinationConnectorConfig,
    OneDriveConnectorConfig,
    PineconeDestinationConnectorConfig,
    PostgresConnectorConfig,
    RedisDestinationConnectorConfig,
    QdrantCloudDestinationConnectorConfig,
    S3ConnectorConfig,
    SnowflakeConnectorConfig,
    WeaviateDestinationConnectorConfig,
    IBMWatsonxS3DestinationConnectorConfig,
)


def concrete_variants(base: type) -> list[type]:
    """All leaf subclasses of ``base``, deduplicated, in definition order."""
    seen: dict[type, None] = {}
    stack = list(base.__subclasses__())
    while stack:
        cls = stack.pop(0)
        children = cls.__subclasses__()
        if children:
            stack.extend(children)
        else:
            seen.setdefault(cls, None)
    return list(seen)


for _variant in _SOURCE_VARIANTS:
    SOURCES.add(_variant.connector_type, _variant)
for _variant in _DESTINATION_VARIANTS:
    DESTINATIONS.add(_variant.connector_type, _variant)
del _variant

SOURCES.verify_covers(concrete_variants(SourceConfig))
DESTINATIONS.verify_covers(concrete_variants(DestinationConfig))
