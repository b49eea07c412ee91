from __future__ import annotations

from threading import Lock
from typing import Dict, List, Mapping, Optional, Tuple

from services.deadline import Deadline
from services.errors import ConfigurationError, SecretError


class MockSSMResolver:
    """In-memory parameter store with the same contract as ``SSMSecretResolver``."""

    def __init__(self, parameters: Optional[Mapping[str, str]] = None) -> None:
        self._parameters: Dict[str, str] = dict(parameters or {})
        self.requests: List[Tuple[str, bool]] = []
        self._lock = Lock()

    def put_parameter(self, name: str, value: str) -> None:
        with self._lock:
            self._parameters[name] = value

    def resolve(
        self, name: str, decrypt: bool, deadline: Optional[Deadline] = None
    ) -> str:
        if not name:
            raise ConfigurationError("SSM parameter name is empty")
        with self._lock:
            self.requests.append((name, decrypt))
            value = self._parameters.get(name)
        if value is None:
            raise SecretError(f"failed to fetch SSM parameter {name}: ParameterNotFound")
        return value
