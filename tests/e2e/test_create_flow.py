"""End-to-end: configure a mapping, create a project from it, list it."""
from __future__ import annotations

import json
from pathlib import Path


class TestCreateFromMapping:
    def test_mapping_to_file_url(self, tmp_path: Path, lazybones_home: Path, zip_builder, capsys) -> None:
        from lazybones.cli._dispatcher import main

        archive = zip_builder(
            tmp_path / "dist" / "webapp.zip",
            {
                "README.txt": "Run ./gradlew run",
                "gradlew": ("#!/bin/sh\necho run\n", 0o100755),
                "src/main/App.java": "class App {}",
            },
        )

        assert main(["config", "set", "templates.mappings.webapp", archive.as_uri()]) == 0
        stored = json.loads((lazybones_home / "managed-config.json").read_text(encoding="utf-8"))
        assert stored["templates"]["mappings"]["webapp"] == archive.as_uri()

        project = tmp_path / "my-app"
        assert main(["create", "webapp", str(project), "-P", "group=org.example"]) == 0

        assert (project / "src" / "main" / "App.java").read_text(encoding="utf-8") == "class App {}"
        assert (lazybones_home / "templates" / "webapp.zip").exists()

        err = capsys.readouterr().err
        assert "Run ./gradlew run" in err
        assert f"Project created in {project}!" in err

        assert main(["list", "--cached"]) == 0
        out = capsys.readouterr().out
        assert "Available mappings" in out
        assert "webapp" in out

    def test_quiet_hides_progress(self, tmp_path: Path, zip_builder, capsys) -> None:
        from lazybones.cli._dispatcher import main

        archive = zip_builder(tmp_path / "t.zip", {"file.txt": "x"})
        project = tmp_path / "quiet"
        assert main(["-q", "create", archive.as_uri(), str(project)]) == 0
        assert (project / "file.txt").exists()
        assert "Project created" not in capsys.readouterr().err
