import json

import pytest

from quadtopo.cli import main
from quadtopo.io import load_json


def test_build_and_check_lattice(tmp_path, capsys):
    path = tmp_path / "grid.json"
    main(["build-lattice", "--cols", "2", "--rows", "1", "--out", str(path)])
    main(["check", "--in", str(path)])

    out = capsys.readouterr().out
    assert f"Saved {path}" in out
    assert "Perfect Topology!" in out


def test_check_failure_exits_nonzero(tmp_path, capsys):
    path = tmp_path / "level.json"
    main(["build-lattice", "--cols", "2", "--rows", "1", "--perimeter-only", "--out", str(path)])

    with pytest.raises(SystemExit) as exc:
        main(["check", "--in", str(path)])

    assert exc.value.code == 1
    assert "Found 1 non-quad face" in capsys.readouterr().out


def test_check_json_and_repaired_output(tmp_path, capsys):
    src = tmp_path / "drawing.json"
    src.write_text(
        json.dumps(
            {
                "metadata": {"rule": "tri-quad"},
                "vertices": [
                    {"id": "a", "position": {"x": 0, "y": 0}, "authoritative": True},
                    {"id": "b", "position": {"x": 60, "y": 0}, "authoritative": True},
                    {"id": "c", "position": {"x": 60, "y": 60}, "authoritative": True},
                    {"id": "d", "position": {"x": 0, "y": 60}, "authoritative": True},
                    {"id": "user_c", "position": {"x": 57, "y": 62}},
                ],
                "edges": [
                    {"id": "ab", "vertices": ["a", "b"]},
                    {"id": "bc", "vertices": ["b", "c"]},
                    {"id": "cd", "vertices": ["c", "d"]},
                    {"id": "da", "vertices": ["d", "a"]},
                    {"id": "diag", "vertices": ["a", "user_c"]},
                ],
            }
        ),
        encoding="utf-8",
    )
    out_path = tmp_path / "repaired.json"

    main(["check", "--in", str(src), "--out", str(out_path), "--json"])

    verdict = json.loads(capsys.readouterr().out)
    assert verdict["is_valid"] is True
    repaired = load_json(out_path)
    assert "user_c" not in repaired.vertices
    assert "a-c" in repaired.edges


def test_rule_flag_overrides_metadata(tmp_path):
    path = tmp_path / "grid.json"
    main(["build-lattice", "--cols", "1", "--rows", "1", "--rule", "tri-quad", "--out", str(path)])
    main(["check", "--in", str(path), "--rule", "quad", "--no-repair"])


def test_repair_command(tmp_path, capsys):
    src = tmp_path / "grid.json"
    dst = tmp_path / "fixed.json"
    main(["build-lattice", "--cols", "1", "--rows", "2", "--out", str(src)])
    main(["repair", "--in", str(src), "--out", str(dst)])

    assert "6 -> 6 vertices, 7 -> 7 edges" in capsys.readouterr().out
    assert dst.exists()


def test_diagnose_command(tmp_path, capsys):
    path = tmp_path / "grid.json"
    main(["build-lattice", "--cols", "2", "--rows", "2", "--out", str(path)])
    main(["diagnose", "--in", str(path), "--json"])

    report = json.loads(capsys.readouterr().out.split("\n", 1)[1])
    assert report["face_count"] == 5


def test_missing_input_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["check", "--in", str(tmp_path / "nope.json")])
    assert exc.value.code == 1


def test_check_keeps_edges_between_hyphenated_vertex_ids(tmp_path, capsys):
    src = tmp_path / "hyphens.json"
    src.write_text(
        json.dumps(
            {
                "vertices": [
                    {"id": "a", "position": {"x": 0, "y": 0}},
                    {"id": "b-c", "position": {"x": 60, "y": 0}},
                    {"id": "c", "position": {"x": 60, "y": 60}},
                    {"id": "a-b", "position": {"x": 0, "y": 60}},
                ],
                "edges": [
                    {"id": "e1", "vertices": ["a", "b-c"]},
                    {"id": "e2", "vertices": ["b-c", "c"]},
                    {"id": "e3", "vertices": ["c", "a-b"]},
                    {"id": "e4", "vertices": ["a-b", "a"]},
                ],
            }
        ),
        encoding="utf-8",
    )
    out_path = tmp_path / "repaired.json"

    main(["check", "--in", str(src), "--out", str(out_path)])

    assert "Perfect Topology!" in capsys.readouterr().out
    assert sorted(load_json(out_path).edges) == ["a-a-b", "a-b-c", "a-b-c#2", "b-c-c"]
