import json
from pathlib import Path

import pytest

from libsync.models import AvailableDependency, Dependency, GradleVersion
from libsync.parser import ReportParser
from libsync.types import MalformedReportError


def test_parse_plain_lists(make_report):
    content = make_report(
        current=[{"group": "junit", "name": "junit", "version": "4.12"}],
        outdated=[
            {
                "group": "com.squareup.moshi",
                "name": "moshi",
                "version": "1.6.0",
                "available": {"release": "1.7.0"},
                "projectUrl": "https://github.com/square/moshi",
            }
        ],
    )
    parser = ReportParser()
    graph = parser.parse(content)

    assert graph.current == [Dependency("junit", "junit", "4.12")]
    assert graph.exceeded == []
    assert graph.outdated == [
        Dependency(
            "com.squareup.moshi",
            "moshi",
            "1.6.0",
            available=AvailableDependency(release="1.7.0"),
            project_url="https://github.com/square/moshi",
        )
    ]


def test_parse_gradle_versions(make_report):
    graph = ReportParser().parse(make_report())

    assert graph.gradle.running == GradleVersion("4.10.2")
    assert graph.gradle.current == GradleVersion("4.10.2")
    assert graph.gradle.nightly == GradleVersion("5.1-20181023000026+0000")
    assert graph.gradle.release_candidate == GradleVersion("5.0-rc-1")


def test_flattened_order_is_current_exceeded_outdated(make_report):
    content = make_report(
        current=[{"group": "a", "name": "one", "version": "1"}],
        exceeded=[{"group": "a", "name": "two", "version": "1", "latest": "0.9"}],
        outdated=[{"group": "a", "name": "three", "version": "1"}],
    )
    graph = ReportParser().parse(content)

    assert [d.name for d in graph.dependencies()] == ["one", "two", "three"]


def test_unknown_fields_are_ignored(make_report):
    content = make_report(
        current=[
            {
                "group": "junit",
                "name": "junit",
                "version": "4.12",
                "userReason": "tests",
                "count": 3,
            }
        ]
    )
    graph = ReportParser().parse(content)

    assert graph.current == [Dependency("junit", "junit", "4.12")]


def test_missing_bucket_is_empty(gradle_payload):
    content = json.dumps({"gradle": gradle_payload})
    graph = ReportParser().parse(content)

    assert graph.dependencies() == []


@pytest.mark.parametrize("field", ["group", "name", "version"])
def test_missing_required_field(make_report, field):
    entry = {"group": "junit", "name": "junit", "version": "4.12"}
    del entry[field]

    with pytest.raises(MalformedReportError, match=f"current\\[0\\].*'{field}'"):
        ReportParser().parse(make_report(current=[entry]))


def test_empty_name_is_malformed(make_report):
    content = make_report(outdated=[{"group": "junit", "name": "", "version": "4.12"}])

    with pytest.raises(MalformedReportError, match="outdated\\[0\\]"):
        ReportParser().parse(content)


def test_not_json():
    with pytest.raises(MalformedReportError, match="not valid JSON"):
        ReportParser().parse("{ this is not json")


def test_root_must_be_an_object():
    with pytest.raises(MalformedReportError):
        ReportParser().parse("[]")


def test_missing_gradle():
    with pytest.raises(MalformedReportError, match="gradle"):
        ReportParser().parse(json.dumps({"current": []}))


def test_missing_gradle_channel(gradle_payload):
    del gradle_payload["nightly"]
    content = json.dumps({"current": [], "gradle": gradle_payload})

    with pytest.raises(MalformedReportError, match="nightly"):
        ReportParser().parse(content)


def test_bucket_must_be_a_list(gradle_payload):
    content = json.dumps({"exceeded": "junit", "gradle": gradle_payload})

    with pytest.raises(MalformedReportError, match="exceeded"):
        ReportParser().parse(content)


def test_integration(report_path: Path):
    parser = ReportParser()
    graph = parser.parse_file(report_path)

    assert len(graph.current) == 4
    assert len(graph.exceeded) == 1
    assert len(graph.outdated) == 4
    assert graph.exceeded[0] == Dependency(
        group="org.jetbrains.kotlin",
        name="kotlin-stdlib",
        version="1.3.0-rc-57",
        latest="1.2.71",
        project_url="https://kotlinlang.org/",
    )
    assert graph.outdated[1].available == AvailableDependency(milestone="26.0-rc1")
    assert graph.outdated[3].reason.startswith("Could not resolve com.example:widget:+.")
    assert graph.gradle.release_candidate.version == "5.0-rc-1"
