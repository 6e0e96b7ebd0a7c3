"""Tests for the subcommand dispatcher and the frame CLI."""

import pytest
from PIL import Image

from framecompose.cli import main as frame_main
from framecompose.main import main


def _manifest(quality=100, **extra):
    m = {
        "frame": {
            "color": "#FFFFFF",
            "padding": 10,
            "bottom_height": 20,
            "corner_radius": 0,
            "quality": quality,
        },
    }
    m.update(extra)
    return m


class TestMainDispatcher:
    def test_no_subcommand_shows_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code != 0

    def test_frame_subcommand_exists(self):
        with pytest.raises(SystemExit):
            main(["frame"])  # missing --manifest, but subcommand recognized

    def test_validate_subcommand_exists(self):
        with pytest.raises(SystemExit):
            main(["validate"])

    def test_invalid_subcommand_errors(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["nonexistent"])
        assert exc_info.value.code != 0

    def test_validate_ok(self, write_manifest, capsys):
        main(["validate", "--manifest", str(write_manifest(_manifest()))])
        assert "Manifest OK" in capsys.readouterr().out

    def test_frame_delegates(self, tmp_path, write_manifest, red_source_path):
        out = tmp_path / "framed.png"
        main([
            "frame", "--manifest", str(write_manifest(_manifest())),
            "--output", str(out), str(red_source_path),
        ])
        assert Image.open(out).size == (120, 140)


class TestFrameCli:
    def test_single_output(self, tmp_path, write_manifest, red_source_path, capsys):
        out = tmp_path / "framed.png"
        frame_main([
            "--manifest", str(write_manifest(_manifest())),
            "--output", str(out), str(red_source_path),
        ])
        assert out.exists()
        assert "Done: 1/1" in capsys.readouterr().out

    def test_batch_output_dir(self, tmp_path, write_manifest, red_source, capsys):
        sources = []
        for i in range(3):
            path = tmp_path / f"photo{i}.png"
            red_source.save(path)
            sources.append(str(path))
        out_dir = tmp_path / "framed"
        frame_main([
            "--manifest", str(write_manifest(_manifest(quality=90))),
            "--output-dir", str(out_dir), "--workers", "2", *sources,
        ])
        outputs = sorted(p.name for p in out_dir.iterdir())
        assert outputs == ["photo0-framed.jpg", "photo1-framed.jpg", "photo2-framed.jpg"]

    def test_format_override(self, tmp_path, write_manifest, red_source_path):
        out_dir = tmp_path / "framed"
        frame_main([
            "--manifest", str(write_manifest(_manifest(quality=90))),
            "--output-dir", str(out_dir), "--format", "png", str(red_source_path),
        ])
        assert (out_dir / "red-framed.png").exists()

    def test_quality_override(self, tmp_path, write_manifest, red_source_path):
        out = tmp_path / "framed.out"
        frame_main([
            "--manifest", str(write_manifest(_manifest(quality=100))),
            "--quality", "70", "--output", str(out), str(red_source_path),
        ])
        assert Image.open(out).format == "JPEG"

    def test_refuses_to_overwrite(self, tmp_path, write_manifest, red_source_path):
        out = tmp_path / "framed.png"
        out.write_bytes(b"existing")
        with pytest.raises(SystemExit):
            frame_main([
                "--manifest", str(write_manifest(_manifest())),
                "--output", str(out), str(red_source_path),
            ])
        assert out.read_bytes() == b"existing"

    def test_force_overwrites(self, tmp_path, write_manifest, red_source_path):
        out = tmp_path / "framed.png"
        out.write_bytes(b"existing")
        frame_main([
            "--manifest", str(write_manifest(_manifest())),
            "--output", str(out), "--force", str(red_source_path),
        ])
        assert Image.open(out).size == (120, 140)

    def test_output_requires_single_input(self, tmp_path, write_manifest, red_source_path):
        with pytest.raises(SystemExit):
            frame_main([
                "--manifest", str(write_manifest(_manifest())),
                "--output", str(tmp_path / "x.png"),
                str(red_source_path), str(red_source_path),
            ])

    def test_requires_output_target(self, write_manifest, red_source_path):
        with pytest.raises(SystemExit):
            frame_main(["--manifest", str(write_manifest(_manifest())), str(red_source_path)])

    def test_bad_manifest_exits(self, write_manifest, red_source_path):
        with pytest.raises(SystemExit) as exc_info:
            frame_main(["--manifest", str(write_manifest({"frame": {}})), "--validate"])
        assert exc_info.value.code == 1

    def test_missing_logo_file_exits(self, tmp_path, write_manifest):
        manifest = _manifest(logo={"path": str(tmp_path / "nope.png"), "width": 10, "height": 10})
        with pytest.raises(SystemExit) as exc_info:
            frame_main(["--manifest", str(write_manifest(manifest)), "--validate"])
        assert exc_info.value.code == 1

    def test_undecodable_input_reported(self, tmp_path, write_manifest, capsys):
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"junk")
        with pytest.raises(SystemExit) as exc_info:
            frame_main([
                "--manifest", str(write_manifest(_manifest())),
                "--output-dir", str(tmp_path / "out"), str(bad),
            ])
        assert exc_info.value.code == 1
        assert "FAILED" in capsys.readouterr().out
