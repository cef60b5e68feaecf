import dataclasses

import pytest

from layerscan.models import (
    AffectedFeature,
    Feature,
    Layer,
    LayerWithContent,
    Namespace,
    NamespacedFeature,
    Processors,
    Severity,
    Vulnerability,
    VulnerabilityID,
    VulnerabilityWithAffected,
)


def test_vulnerability_id_uses_name_and_namespace_name():
    ns = Namespace("namespace 1", "VersionFormat1")
    vuln = VulnerabilityWithAffected(Vulnerability(name="vulnerability 1", namespace=ns))
    assert vuln.vulnerability_id() == VulnerabilityID("vulnerability 1", "namespace 1")


def test_vulnerability_id_is_hashable_key():
    ns = Namespace("ns", "fmt")
    a = VulnerabilityWithAffected(Vulnerability(name="v", namespace=ns))
    b = VulnerabilityWithAffected(Vulnerability(name="v", namespace=ns, severity=Severity.LOW))
    assert len({a.vulnerability_id(), b.vulnerability_id()}) == 1


def test_processors_is_empty():
    assert Processors().is_empty()
    assert not Processors(detectors=["os-release"]).is_empty()
    assert not Processors(listers=["dpkg"]).is_empty()


def test_default_processors_are_independent():
    first = LayerWithContent(Layer("a"))
    second = LayerWithContent(Layer("b"))
    first.processed_by.detectors.append("os-release")
    assert second.processed_by.detectors == []


def test_value_records_deduplicate_in_sets():
    ns = Namespace("debian:7", "dpkg")
    feature = Feature("mawk", "1.3.3-17", "dpkg")
    items = {
        NamespacedFeature(feature, ns),
        NamespacedFeature(Feature("mawk", "1.3.3-17", "dpkg"), Namespace("debian:7", "dpkg")),
    }
    assert len(items) == 1
    assert len({AffectedFeature(ns, "mawk"), AffectedFeature(ns, "mawk")}) == 1


def test_namespace_is_immutable():
    ns = Namespace("debian:7", "dpkg")
    with pytest.raises(dataclasses.FrozenInstanceError):
        ns.name = "debian:8"
    assert ns.name == "debian:7"
    assert ns == Namespace("debian:7", "dpkg")


def test_vulnerability_defaults_to_unknown_severity():
    vuln = Vulnerability(name="v")
    assert vuln.severity is Severity.UNKNOWN
    assert vuln.metadata is None