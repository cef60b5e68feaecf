"""Vulnerability namespacing, change detection and notification creation."""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from layerscan.models import (
    AffectedFeature,
    Severity,
    VulnerabilityID,
    VulnerabilityNotification,
    VulnerabilityWithAffected,
)

logger = logging.getLogger(__name__)


@dataclass
class VulnerabilityChange:
    """A vulnerability as it was stored and as it is now; either side may be None."""

    old: VulnerabilityWithAffected | None = None
    new: VulnerabilityWithAffected | None = None


@contextmanager
def _transaction(datastore: Any) -> Iterator[Any]:
    tx = datastore.begin()
    try:
        yield tx
    finally:
        tx.rollback()


def _is_valid_severity(severity: Any) -> bool:
    try:
        Severity(severity)
    except ValueError:
        return False
    return True


def _is_valid_affected(feature: AffectedFeature) -> bool:
    return bool(
        feature.affected_version
        and feature.feature_name
        and feature.namespace.name
        and feature.namespace.version_format
    )


def namespace_vulnerabilities(
    vulnerabilities: Iterable[VulnerabilityWithAffected],
) -> list[VulnerabilityWithAffected]:
    """Split vulnerabilities by the namespaces of their affected features.

    Each result holds only the affected features of its own namespace, and
    vulnerabilities sharing a name and namespace are merged. Malformed
    affected features and vulnerabilities are dropped with a warning.
    """
    by_key: dict[tuple[str, str], VulnerabilityWithAffected] = {}
    for vuln in vulnerabilities:
        for affected in vuln.affected:
            if not _is_valid_affected(affected):
                logger.warning(
                    "Mal-formated affected feature (skipped)",
                    extra={
                        "Name": affected.feature_name,
                        "Affected Version": affected.affected_version,
                        "Namespace": f"{affected.namespace.name}:"
                        f"{affected.namespace.version_format}",
                    },
                )
                continue
            key = (affected.namespace.name, vuln.vulnerability.name)
            existing = by_key.get(key)
            if existing is None:
                by_key[key] = VulnerabilityWithAffected(
                    vulnerability=dataclasses.replace(
                        vuln.vulnerability, namespace=affected.namespace
                    ),
                    affected=[affected],
                )
            else:
                existing.affected.append(affected)

    result = []
    for vuln in by_key.values():
        details = vuln.vulnerability
        if (
            not details.name
            or not _is_valid_severity(details.severity)
            or not details.namespace.name
            or not details.namespace.version_format
        ):
            logger.warning(
                "Vulnerability is mal-formatted",
                extra={
                    "Name": details.name,
                    "Severity": str(details.severity),
                    "Namespace": f"{details.namespace.name}:"
                    f"{details.namespace.version_format}",
                },
            )
            continue
        result.append(vuln)
    return result


def is_vulnerability_changed(
    a: VulnerabilityWithAffected | None, b: VulnerabilityWithAffected | None
) -> bool:
    """Return True when the severity or the affected features differ."""
    if a is b:
        return False
    if (
        a is None
        or b is None
        or a.vulnerability.severity != b.vulnerability.severity
        or len(a.affected) != len(b.affected)
    ):
        return True

    checked = {(f.namespace.name, f.feature_name): False for f in a.affected}
    for feature in b.affected:
        key = (feature.namespace.name, feature.feature_name)
        if checked.get(key, True):
            return True
        checked[key] = True
    return False


def find_vulnerability_changes(
    old: Sequence[VulnerabilityWithAffected], new: Sequence[VulnerabilityWithAffected]
) -> list[VulnerabilityChange]:
    """Find the changes from the old vulnerabilities to the new ones.

    Raises ValueError when the old vulnerabilities are not unique.
    """
    changes: dict[VulnerabilityID, VulnerabilityChange] = {}
    for vuln in old:
        key = vuln.vulnerability_id()
        if key in changes:
            raise ValueError("duplicated old vulnerability")
        changes[key] = VulnerabilityChange(old=vuln)

    for vuln in new:
        key = vuln.vulnerability_id()
        change = changes.get(key)
        if change is None:
            changes[key] = VulnerabilityChange(new=vuln)
        elif is_vulnerability_changed(change.old, vuln):
            change.new = vuln
        else:
            del changes[key]

    return list(changes.values())


def update_vulnerabilities(
    datastore: Any, vulnerabilities: Sequence[VulnerabilityWithAffected]
) -> list[VulnerabilityChange]:
    """Store unique vulnerabilities and return what changed."""
    logger.debug("updating vulnerabilities", extra={"count": len(vulnerabilities)})
    if not vulnerabilities:
        return []

    ids = [vuln.vulnerability_id() for vuln in vulnerabilities]
    with _transaction(datastore) as tx:
        stored = [vuln for vuln in tx.find_vulnerabilities(ids) if vuln is not None]
        changes = find_vulnerability_changes(stored, vulnerabilities)

        to_remove = [c.old.vulnerability_id() for c in changes if c.old is not None]
        to_add = [c.new for c in changes if c.new is not None]

        logger.debug("marking vulnerabilities as outdated", extra={"count": len(to_remove)})
        tx.delete_vulnerabilities(to_remove)
        logger.debug("inserting new vulnerabilities", extra={"count": len(to_add)})
        tx.insert_vulnerabilities(to_add)
        tx.commit()
    return changes


def create_vulnerability_notifications(
    datastore: Any, changes: Sequence[VulnerabilityChange]
) -> None:
    """Create one notification per change and store them."""
    logger.debug("creating vulnerability notifications", extra={"count": len(changes)})
    if not changes:
        return

    notifications = [
        VulnerabilityNotification(
            name=str(uuid.uuid4()),
            created=datetime.now(),
            old=change.old.vulnerability if change.old is not None else None,
            new=change.new.vulnerability if change.new is not None else None,
        )
        for change in changes
    ]
    with _transaction(datastore) as tx:
        tx.insert_vulnerability_notifications(notifications)
        tx.commit()