"""Tests for the command-line interface."""

import pytest
from lineclip import __version__
from lineclip.cli import build_config, create_parser, main
from lineclip.conversion import parse_frontmatter


class TestParser:
    """Tests for argument parsing."""

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_command_required(self):
        """Test that a subcommand must be given."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_verbose_and_quiet_are_exclusive(self):
        """Test the mutually exclusive output flags."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["-v", "-q", "resolve", "x"])


class TestBuildConfig:
    """Tests for config loading and overrides."""

    def test_overrides(self, tmp_path):
        """Test that command-line options win over the config file."""
        config_file = tmp_path / "lineclip.yaml"
        config_file.write_text("message_endpoint: https://a.example.com\ndocument_directory: ./from-file\n")

        args = create_parser().parse_args(
            ["-c", str(config_file), "-v", "sync", "-e", "https://b.example.com", "--dry-run"]
        )
        config = build_config(args)

        assert config.message_endpoint == "https://b.example.com"
        assert str(config.document_directory) == "from-file"
        assert config.dry_run is True
        assert config.log_level == "DEBUG"


class TestMain:
    """Tests for main()."""

    def test_resolve_plain_text(self, capsys):
        """Test that plain text is printed unchanged."""
        assert main(["-q", "resolve", "buy milk"]) == 0
        assert capsys.readouterr().out == "buy milk\n"

    def test_resolve_with_frontmatter(self, capsys):
        """Test the assembled document output."""
        code = main(["-q", "resolve", "buy milk", "--frontmatter", "--message-id", "7", "--timestamp", "1700000000000"])

        assert code == 0
        assert capsys.readouterr().out == (
            "---\n"
            'title: "buy milk"\n'
            "date: 2023-11-14T22:13:20.000Z\n"
            "source: LINE\n"
            'messageId: "7"\n'
            "tags:\n"
            "---\n"
            "\n"
            "buy milk\n"
        )

    def test_resolve_frontmatter_defaults_to_now(self, capsys):
        """Test that --frontmatter without --timestamp dates the document now."""
        assert main(["-q", "resolve", "buy milk", "--frontmatter"]) == 0

        fields, body = parse_frontmatter(capsys.readouterr().out)
        assert fields["messageId"] == "cli"
        assert fields["date"].endswith("Z")
        assert fields["date"][:4].isdigit() and int(fields["date"][:4]) >= 2024
        assert body == "buy milk\n"

    def test_resolve_invalid_timestamp(self, capsys):
        """Test that a bad --timestamp is reported."""
        assert main(["-q", "resolve", "x", "--frontmatter", "--timestamp", "soon"]) == 1
        assert capsys.readouterr().out == ""

    def test_sync_without_endpoint(self, tmp_path):
        """Test that sync needs an endpoint."""
        assert main(["-q", "sync", "-o", str(tmp_path)]) == 1

    def test_bad_config_file(self, tmp_path):
        """Test that config errors are reported with exit code 1."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("unknown_key: 1\n")
        assert main(["-c", str(config_file), "resolve", "x"]) == 1

    def test_missing_config_file(self, tmp_path):
        """Test that a missing config file is reported."""
        assert main(["-c", str(tmp_path / "nope.yaml"), "resolve", "x"]) == 1
