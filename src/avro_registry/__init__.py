from avro_registry.common.exceptions import (
    AvroRegistryError,
    CodecError,
    FramingError,
    SchemaNotFoundError,
    SchemaRegistryConnectionError,
    SchemaRegistryError,
)
from avro_registry.common.serde import AvroSchema
from avro_registry.messaging.avro import AvroRegistry, create_avro_registry

__all__ = [
    "AvroRegistry",
    "create_avro_registry",
    "AvroSchema",
    "AvroRegistryError",
    "CodecError",
    "FramingError",
    "SchemaNotFoundError",
    "SchemaRegistryConnectionError",
    "SchemaRegistryError",
]
