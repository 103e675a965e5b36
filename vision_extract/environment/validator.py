"""Capability probe run before any other pipeline work."""

import importlib.util
import shutil
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from vision_extract.exceptions import EnvironmentValidationError

CREDENTIAL = "credential"
EXECUTABLE = "executable"
MODULE = "module"


@dataclass(frozen=True)
class MissingRequirement:
    """A single requirement that the environment does not satisfy."""

    kind: str
    name: str

    def describe(self) -> str:
        if self.kind == CREDENTIAL:
            return f"environment variable {self.name} is not set"
        if self.kind == EXECUTABLE:
            return f"executable '{self.name}' not found on PATH"
        return f"Python module '{self.name}' is not installed"


@dataclass(frozen=True)
class EnvironmentReport:
    missing: tuple[MissingRequirement, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.missing


def _module_available(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


class EnvironmentValidator:
    """Checks credentials, executables and capability modules in one pass."""

    def __init__(
        self,
        *,
        credentials: Mapping[str, str],
        executables: Sequence[str] = (),
        modules: Sequence[str] = (),
        which: Callable[[str], str | None] = shutil.which,
        module_available: Callable[[str], bool] = _module_available,
    ) -> None:
        self._credentials = dict(credentials)
        self._executables = list(executables)
        self._modules = list(modules)
        self._which = which
        self._module_available = module_available

    def probe(self) -> EnvironmentReport:
        """Collect every missing requirement without raising."""
        missing: list[MissingRequirement] = []
        for name, value in self._credentials.items():
            if not value or not value.strip():
                missing.append(MissingRequirement(CREDENTIAL, name))
        for name in self._executables:
            if self._which(name) is None:
                missing.append(MissingRequirement(EXECUTABLE, name))
        for name in self._modules:
            if not self._module_available(name):
                missing.append(MissingRequirement(MODULE, name))
        return EnvironmentReport(missing=tuple(missing))

    def validate(self) -> EnvironmentReport:
        """Probe the environment and raise if anything is missing.

        Raises:
            EnvironmentValidationError: listing all missing requirements.
        """
        report = self.probe()
        if not report.ok:
            raise EnvironmentValidationError([m.describe() for m in report.missing])
        return report
