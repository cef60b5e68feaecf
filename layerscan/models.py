"""Data records shared by the layer worker and the vulnerability updater."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """How serious a vulnerability is."""

    UNKNOWN = "Unknown"
    NEGLIGIBLE = "Negligible"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"
    DEFCON1 = "Defcon1"


@dataclass(frozen=True)
class Namespace:
    """A versioned distribution or ecosystem that features belong to."""

    name: str = ""
    version_format: str = ""


@dataclass(frozen=True)
class Feature:
    """A package found in a layer."""

    name: str = ""
    version: str = ""
    version_format: str = ""


@dataclass(frozen=True)
class NamespacedFeature:
    """A feature bound to the namespace it was found in."""

    feature: Feature
    namespace: Namespace


@dataclass(frozen=True)
class AffectedFeature:
    """A feature affected by a vulnerability within one namespace."""

    namespace: Namespace = field(default_factory=Namespace)
    feature_name: str = ""
    affected_version: str = ""
    fixed_in_version: str = ""


@dataclass
class Vulnerability:
    """A vulnerability as published by a vulnerability source."""

    name: str = ""
    namespace: Namespace = field(default_factory=Namespace)
    description: str = ""
    link: str = ""
    severity: Severity = Severity.UNKNOWN
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class VulnerabilityID:
    """Identifies a vulnerability by its name and namespace name."""

    name: str
    namespace: str


@dataclass
class VulnerabilityWithAffected:
    """A vulnerability together with the features it affects."""

    vulnerability: Vulnerability = field(default_factory=Vulnerability)
    affected: list[AffectedFeature] = field(default_factory=list)

    def vulnerability_id(self) -> VulnerabilityID:
        """Return the identifier of the vulnerability."""
        return VulnerabilityID(self.vulnerability.name, self.vulnerability.namespace.name)


@dataclass
class VulnerabilityNotification:
    """Records that a vulnerability was added, changed or removed."""

    name: str
    created: datetime
    old: Vulnerability | None = None
    new: Vulnerability | None = None


@dataclass
class Processors:
    """Names of namespace detectors and feature listers."""

    detectors: list[str] = field(default_factory=list)
    listers: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True when there is neither a detector nor a lister."""
        return not self.detectors and not self.listers


@dataclass(frozen=True)
class Layer:
    """A container image layer identified by its hash."""

    hash: str


@dataclass
class LayerWithContent:
    """A layer with what has been detected in it and by which processors."""

    layer: Layer
    processed_by: Processors = field(default_factory=Processors)
    namespaces: list[Namespace] = field(default_factory=list)
    features: list[Feature] = field(default_factory=list)


@dataclass
class Ancestry:
    """An ordered chain of layers forming an image."""

    name: str
    layers: list[Layer] = field(default_factory=list)