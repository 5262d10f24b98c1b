# SPDX-License-Identifier: MIT
"""Version detection and forward migration for versioned records.

A :class:`VersionedEntity` owns an ordered registry of :class:`VersionModule`
objects, one per schema version from ``0`` to ``latest_version``. Incoming
values of unknown vintage are detected, validated against the version they
claim, then upgraded one step at a time until they reach the latest shape.

The history is linear: version ``k`` has exactly one predecessor, ``k - 1``,
and its ``upgrade`` accepts only that predecessor's validated model.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Literal, Mapping, TypeVar

import logfire
from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

Upgrade = Callable[[Any], BaseModel]
VersionDetector = Callable[[Any], "int | None"]


class ErrorKind(str, Enum):
    """Reasons a value could not be turned into a current record."""

    UNDETECTED = "undetected"
    UNKNOWN_VERSION = "unknown_version"
    SCHEMA_MISMATCH = "schema_mismatch"
    UPGRADE_INVARIANT_VIOLATION = "upgrade_invariant_violation"


class RegistryError(ValueError):
    """Raised when a version registry is incomplete or inconsistent."""


class VersioningError(Exception):
    """Base class for detection and migration failures."""

    kind: ErrorKind

    def __init__(self, message: str, version: int | None = None) -> None:
        super().__init__(message)
        self.version = version


class UnknownVersionError(VersioningError):
    """The value claims a version that is not registered."""

    kind = ErrorKind.UNKNOWN_VERSION


class UndetectedVersionError(UnknownVersionError):
    """The detector could not attribute the value to any version."""

    kind = ErrorKind.UNDETECTED


class SchemaMismatchError(VersioningError):
    """The value failed validation for the version it claims."""

    kind = ErrorKind.SCHEMA_MISMATCH


class UpgradeInvariantViolation(VersioningError):
    """An upgrade step produced output its own schema rejects.

    This indicates a bug in a version module rather than bad input.
    """

    kind = ErrorKind.UPGRADE_INVARIANT_VIOLATION


def summarise_validation_error(exc: ValidationError) -> str:
    """Return a one-line summary of ``exc`` suitable for logs and results."""

    return "; ".join(
        f"{'.'.join(map(str, error['loc'])) or '<root>'}: {error['msg']}"
        for error in exc.errors()
    )


@dataclass(frozen=True)
class VersionModule:
    """Validator and upgrader pair for a single schema version.

    Attributes:
        version: Schema version number.
        schema: Pydantic model describing the version's shape.
        upgrade: Function converting a validated model of ``version - 1`` into
            a model of ``version``. ``None`` only for version ``0``.
    """

    version: int
    schema: type[BaseModel]
    upgrade: Upgrade | None = None

    def validate(self, raw: Any) -> BaseModel:
        """Return ``raw`` validated against this version's schema.

        Model instances of any other class, subclasses included, are checked
        through their wire form. Later versions may extend earlier models, and
        pydantic would otherwise accept them as they are.

        Raises:
            ValidationError: If ``raw`` does not conform.
        """
        if isinstance(raw, BaseModel) and type(raw) is not self.schema:
            raw = raw.model_dump(by_alias=True, exclude_unset=True)
        return self.schema.model_validate(raw)

    def matches(self, raw: Any) -> bool:
        """Return ``True`` when ``raw`` validates against this version."""
        try:
            self.validate(raw)
        except ValidationError:
            return False
        return True


@dataclass(frozen=True)
class ParseOk(Generic[T]):
    """Successful parse carrying the current record."""

    value: T
    version: int
    ok: Literal[True] = True


@dataclass(frozen=True)
class ParseFailure:
    """Failed parse describing why no current record was produced."""

    kind: ErrorKind
    message: str
    version: int | None = None
    ok: Literal[False] = False


ParseResult = ParseOk[T] | ParseFailure


class VersionedEntity(Generic[T]):
    """Public surface for detecting, validating and migrating records.

    Args:
        latest_version: Highest registered schema version.
        version_map: Mapping of every version in ``[0, latest_version]`` to its
            module.
        get_version: Detector returning the version a raw value belongs to, or
            ``None`` when it cannot tell.

    Raises:
        RegistryError: If the registry has gaps or misplaced upgrades.
    """

    def __init__(
        self,
        *,
        latest_version: int,
        version_map: Mapping[int, VersionModule],
        get_version: VersionDetector,
    ) -> None:
        _check_registry(latest_version, version_map)
        self.latest_version = latest_version
        # Indexed by version number; the registry is dense from 0.
        self._modules: tuple[VersionModule, ...] = tuple(
            version_map[number] for number in range(latest_version + 1)
        )
        self._get_version = get_version

    @property
    def latest(self) -> VersionModule:
        """Return the module for the latest schema version."""
        return self._modules[self.latest_version]

    def module(self, version: int) -> VersionModule:
        """Return the module registered for ``version``.

        Raises:
            UnknownVersionError: If ``version`` is outside the registry.
        """
        if not 0 <= version <= self.latest_version:
            raise UnknownVersionError(
                f"Version {version} is not registered "
                f"(latest is {self.latest_version})",
                version,
            )
        return self._modules[version]

    def detect(self, raw: Any) -> int | None:
        """Return the version ``raw`` appears to belong to, or ``None``."""
        return self._get_version(raw)

    def migrate(self, raw: Any, start_version: int) -> T:
        """Validate ``raw`` at ``start_version`` and upgrade it to the latest.

        Args:
            raw: Value claimed to conform to ``start_version``.
            start_version: Version to validate ``raw`` against.

        Returns:
            The fully upgraded record.

        Raises:
            UnknownVersionError: If ``start_version`` is not registered.
            SchemaMismatchError: If ``raw`` fails ``start_version`` validation.
            UpgradeInvariantViolation: If an upgrade produces invalid output.
        """
        start = self.module(start_version)
        with logfire.span(
            "versioning.migrate",
            attributes={"start_version": start_version, "latest": self.latest_version},
        ):
            try:
                value = start.validate(raw)
            except ValidationError as exc:
                raise SchemaMismatchError(
                    f"Value does not match version {start_version}: "
                    f"{summarise_validation_error(exc)}",
                    start_version,
                ) from exc

            for module in self._modules[start_version + 1 :]:
                value = _apply_upgrade(module, value)

            logfire.debug(
                "Migrated record",
                start_version=start_version,
                steps=self.latest_version - start_version,
            )
            return value  # type: ignore[return-value]

    def is_latest(self, raw: Any) -> bool:
        """Return ``True`` when ``raw`` already validates as a current record."""
        return self.latest.matches(raw)

    def is_valid(self, raw: Any) -> bool:
        """Return ``True`` when ``raw`` can be detected and migrated."""
        return self.safe_parse(raw).ok

    def safe_parse(self, raw: Any) -> ParseResult[T]:
        """Return a :class:`ParseOk` or :class:`ParseFailure` for ``raw``.

        Never raises for detection or migration problems.
        """
        version = self.detect(raw)
        if version is None:
            return ParseFailure(
                kind=ErrorKind.UNDETECTED,
                message="Could not determine the schema version of the value",
            )
        try:
            value = self.migrate(raw, version)
        except VersioningError as exc:
            logfire.debug(
                "Parse failed", kind=exc.kind.value, version=version, error=str(exc)
            )
            return ParseFailure(kind=exc.kind, message=str(exc), version=version)
        return ParseOk(value=value, version=version)

    def parse(self, raw: Any) -> T:
        """Return the current record for ``raw`` or raise.

        Intended for call sites where malformed input is a programming error.

        Raises:
            UndetectedVersionError: If no version could be detected.
            UnknownVersionError: If the detected version is not registered.
            SchemaMismatchError: If ``raw`` fails its version's validation.
            UpgradeInvariantViolation: If an upgrade produces invalid output.
        """
        version = self.detect(raw)
        if version is None:
            raise UndetectedVersionError(
                "Could not determine the schema version of the value"
            )
        return self.migrate(raw, version)


def _apply_upgrade(module: VersionModule, value: BaseModel) -> BaseModel:
    """Run ``module.upgrade`` on ``value`` and check the result's type."""
    upgrade = module.upgrade
    assert upgrade is not None  # guaranteed by _check_registry
    try:
        upgraded = upgrade(value)
    except ValidationError as exc:
        raise UpgradeInvariantViolation(
            f"Upgrade to version {module.version} produced an invalid record: "
            f"{summarise_validation_error(exc)}",
            module.version,
        ) from exc
    if type(upgraded) is not module.schema:
        raise UpgradeInvariantViolation(
            f"Upgrade to version {module.version} returned "
            f"{type(upgraded).__name__}, expected {module.schema.__name__}",
            module.version,
        )
    return upgraded


def _check_registry(latest_version: int, version_map: Mapping[int, VersionModule]) -> None:
    """Raise :class:`RegistryError` unless ``version_map`` is dense and ordered."""
    if latest_version < 0:
        raise RegistryError("latest_version must be non-negative")
    expected = set(range(latest_version + 1))
    missing = sorted(expected - set(version_map))
    if missing:
        raise RegistryError(f"Missing version modules: {missing}")
    extra = sorted(set(version_map) - expected)
    if extra:
        raise RegistryError(f"Versions above latest_version registered: {extra}")
    for number, module in version_map.items():
        if module.version != number:
            raise RegistryError(
                f"Module for version {module.version} registered under {number}"
            )
        if number == 0 and module.upgrade is not None:
            raise RegistryError("Version 0 must not define an upgrade")
        if number > 0 and module.upgrade is None:
            raise RegistryError(f"Version {number} is missing its upgrade")


__all__ = [
    "ErrorKind",
    "ParseFailure",
    "ParseOk",
    "ParseResult",
    "RegistryError",
    "SchemaMismatchError",
    "UndetectedVersionError",
    "UnknownVersionError",
    "UpgradeInvariantViolation",
    "VersionModule",
    "VersionedEntity",
    "VersioningError",
    "summarise_validation_error",
]
