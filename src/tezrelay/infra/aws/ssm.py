"""AWS SSM Parameter Store writer."""

import boto3


class ParameterStore:
    """Thin wrapper over the SSM client; only string parameters are written."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client("ssm", region_name=region or None)

    def put(self, name: str, value: str) -> None:
        self._client.put_parameter(Name=name, Type="String", Value=value, Overwrite=True)
