import json

from sitebuild.health import BuildReport


def test_report_writes_counts_and_deduplicated_errors(tmp_path):
    report = BuildReport("build", health_dir=tmp_path / "_health")
    report.record_collection("posts", entries=4, tags=7)
    report.record_collection("notes", entries=2, tags=3)
    report.extend_errors(["boom", " boom ", "", None, "other"])

    path = report.write(built_at="2024-05-01T00:00:00Z")

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert path.name == "build.json"
    assert payload == {
        "built_at": "2024-05-01T00:00:00Z",
        "ok": False,
        "collections": {"posts": 4, "notes": 2},
        "tags": {"posts": 7, "notes": 3},
        "entries_published": 6,
        "errors": ["boom", "other"],
    }


def test_clean_report_is_ok(tmp_path):
    report = BuildReport("build", health_dir=tmp_path)
    path = report.write()

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["ok"] is True
    assert payload["built_at"].endswith("Z")
