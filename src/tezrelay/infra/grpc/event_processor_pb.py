"""Message classes for the `event-processor.proto` contract.

Equivalent to:

    syntax = "proto3";
    import "google/protobuf/timestamp.proto";
    import "google/protobuf/struct.proto";

    service EventProcessor {
      rpc PushEvent(EventInput) returns (EventOutput);
      rpc PushNftEvent(NftEventInput) returns (EventOutput);
      rpc PushSeriesEvent(SeriesEventInput) returns (EventOutput);
    }

    message EventInput / NftEventInput {
      string type = 1; string blockchain = 2; string contract = 3;
      string from = 4; string to = 5; string tokenID = 6; string txID = 7;
      google.protobuf.Timestamp txTime = 8; int32 eventIndex = 9;
    }
    message SeriesEventInput {
      string type = 1; string contract = 2; google.protobuf.Struct data = 3;
      string txID = 4; google.protobuf.Timestamp txTime = 5; int32 eventIndex = 6;
    }
    message EventOutput { string result = 1; int32 status = 2; }

The descriptor is registered in the default pool the same way protoc output does it.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf import struct_pb2, timestamp_pb2  # noqa: F401  registers imported .proto files

SERVICE_NAME = "EventProcessor"

_FDP = descriptor_pb2.FieldDescriptorProto

_NFT_EVENT_FIELDS = [
    ("type", 1, _FDP.TYPE_STRING, None),
    ("blockchain", 2, _FDP.TYPE_STRING, None),
    ("contract", 3, _FDP.TYPE_STRING, None),
    ("from", 4, _FDP.TYPE_STRING, None),
    ("to", 5, _FDP.TYPE_STRING, None),
    ("tokenID", 6, _FDP.TYPE_STRING, None),
    ("txID", 7, _FDP.TYPE_STRING, None),
    ("txTime", 8, _FDP.TYPE_MESSAGE, ".google.protobuf.Timestamp"),
    ("eventIndex", 9, _FDP.TYPE_INT32, None),
]

_SERIES_EVENT_FIELDS = [
    ("type", 1, _FDP.TYPE_STRING, None),
    ("contract", 2, _FDP.TYPE_STRING, None),
    ("data", 3, _FDP.TYPE_MESSAGE, ".google.protobuf.Struct"),
    ("txID", 4, _FDP.TYPE_STRING, None),
    ("txTime", 5, _FDP.TYPE_MESSAGE, ".google.protobuf.Timestamp"),
    ("eventIndex", 6, _FDP.TYPE_INT32, None),
]

_EVENT_OUTPUT_FIELDS = [
    ("result", 1, _FDP.TYPE_STRING, None),
    ("status", 2, _FDP.TYPE_INT32, None),
]

_METHODS = [
    ("PushEvent", "EventInput"),
    ("PushNftEvent", "NftEventInput"),
    ("PushSeriesEvent", "SeriesEventInput"),
]


def _add_message(file_proto: descriptor_pb2.FileDescriptorProto, name: str, fields: list) -> None:
    message = file_proto.message_type.add(name=name)
    for field_name, number, field_type, type_name in fields:
        field = message.field.add(
            name=field_name,
            number=number,
            label=_FDP.LABEL_OPTIONAL,
            type=field_type,
        )
        if type_name is not None:
            field.type_name = type_name


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(name="event-processor.proto", syntax="proto3")
    file_proto.dependency.extend(["google/protobuf/timestamp.proto", "google/protobuf/struct.proto"])

    _add_message(file_proto, "EventInput", _NFT_EVENT_FIELDS)
    _add_message(file_proto, "NftEventInput", _NFT_EVENT_FIELDS)
    _add_message(file_proto, "SeriesEventInput", _SERIES_EVENT_FIELDS)
    _add_message(file_proto, "EventOutput", _EVENT_OUTPUT_FIELDS)

    service = file_proto.service.add(name=SERVICE_NAME)
    for method_name, input_type in _METHODS:
        service.method.add(name=method_name, input_type=f".{input_type}", output_type=".EventOutput")
    return file_proto


DESCRIPTOR = descriptor_pool.Default().AddSerializedFile(_build_file().SerializeToString())

EventInput = message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name["EventInput"])
NftEventInput = message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name["NftEventInput"])
SeriesEventInput = message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name["SeriesEventInput"])
EventOutput = message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name["EventOutput"])

REQUEST_TYPES = {
    "PushEvent": EventInput,
    "PushNftEvent": NftEventInput,
    "PushSeriesEvent": SeriesEventInput,
}


def method_path(method_name: str) -> str:
    return f"/{SERVICE_NAME}/{method_name}"
