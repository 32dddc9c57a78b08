"""Errors raised while managing a benchmark testbed.

The hierarchy mirrors how failures propagate: settings, cloud-provider and
ssh failures are all testbed errors, and ssh failures are also monitor errors.
"""

from __future__ import annotations

from typing import Any, Tuple, Union

Address = Union[Tuple[str, int], str]


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _format_address(address: Address) -> str:
    if isinstance(address, str):
        return address
    host, port = address
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class TestbedError(Exception):
    """Any failure while operating the testbed."""

    __test__ = False


class InsufficientCapacityError(TestbedError):
    def __init__(self, missing: int) -> None:
        self.missing = missing
        super().__init__(f"Not enough instances: missing {missing} instances")


class SettingsError(TestbedError):
    """A settings-related file could not be read."""

    _what = "settings"

    def __init__(self, file: str, message: str) -> None:
        self.file = file
        self.message = message
        super().__init__(
            f"Failed to read {self._what} file '{_quote(file)}': {message}"
        )


class InvalidSettingsError(SettingsError):
    _what = "settings"


class TokenFileError(SettingsError):
    _what = "token"


class SshPublicKeyFileError(SettingsError):
    _what = "ssh public key"


class CloudProviderError(TestbedError):
    """The cloud provider rejected or garbled a request."""


class RequestError(CloudProviderError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Failed to send server request: {message}")


class UnexpectedResponseError(CloudProviderError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Unexpected response: {message}")


class FailureResponseCodeError(CloudProviderError):
    def __init__(self, status: str, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"Received error status code ({status}): {message}")


class SshKeyNotFoundError(CloudProviderError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'SSH key "{name}" not found')


class MonitorError(TestbedError):
    """Monitoring could not be set up."""


class GrafanaError(MonitorError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Failed to start Grafana: {message}")


class SshError(MonitorError):
    """A remote command or connection failed."""


class SshSessionError(SshError):
    def __init__(self, address: Address, error: Any) -> None:
        self.address = address
        self.error = error
        super().__init__(
            f"Failed to create ssh session with {_format_address(address)}: {error}"
        )


class SshConnectionError(SshError):
    def __init__(self, address: Address, error: Any) -> None:
        self.address = address
        self.error = error
        super().__init__(
            f"Failed to connect to instance {_format_address(address)}: {error}"
        )


class NonZeroExitCodeError(SshError):
    def __init__(self, address: Address, code: int, message: str) -> None:
        self.address = address
        self.code = code
        self.message = message
        super().__init__(
            f"Remote execution on {_format_address(address)} "
            f"returned exit code ({code}): {message}"
        )