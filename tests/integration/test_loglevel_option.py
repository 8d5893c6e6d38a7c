from typer.testing import CliRunner

from appexplorer.cli.main import app

runner = CliRunner()

SOURCE = """
export function Hello() {
  return <Title />;
}
"""


def build(factory, **files):
    for path, content in files.items():
        factory.with_source(path, content)
    factory.build()
    factory.commit()


def test_loglevel_default_is_info(github_checkout):
    """Verifies the default loglevel shows INFO and above, but not DEBUG."""
    build(github_checkout.with_source("src/app.tsx", SOURCE))

    result = runner.invoke(app, ["scan"], catch_exceptions=False)

    assert result.exit_code == 0
    # L.scan.run.start is INFO, L.scan.run.complete is SUCCESS
    assert "Scanning 1 file(s)..." in result.output
    assert "Scanned 1 file(s)." in result.output
    # L.scan.file.start is DEBUG
    assert "Scanning src/app.tsx" not in result.output


def test_loglevel_warning_hides_info_and_success(github_checkout):
    """Verifies --loglevel warning hides lower level messages."""
    build(github_checkout)

    result = runner.invoke(app, ["--loglevel", "warning", "scan"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Scanning" not in result.output
    assert "Scanned" not in result.output
    # L.scan.run.empty is WARNING
    assert "No source files found to scan." in result.output


def test_loglevel_debug_shows_debug_messages(github_checkout):
    """Verifies --loglevel debug shows verbose debug messages."""
    build(github_checkout.with_source("src/app.tsx", SOURCE))

    result = runner.invoke(app, ["--loglevel", "debug", "scan"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Scanning src/app.tsx" in result.output


def test_loglevel_is_case_insensitive(github_checkout):
    build(github_checkout.with_source("src/app.tsx", SOURCE))

    result = runner.invoke(app, ["--loglevel", "DEBUG", "scan"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Scanning src/app.tsx" in result.output


def test_loglevel_error_shows_only_errors(github_checkout):
    """Verifies --loglevel error hides everything except errors."""
    build(
        github_checkout,
        **{"src/app.tsx": SOURCE, "src/broken.tsx": "export function (\n"},
    )

    result = runner.invoke(app, ["--loglevel", "error", "scan"], catch_exceptions=False)

    assert result.exit_code == 1
    assert "Scanning" not in result.output
    assert "Scanned" not in result.output
    assert "Failed to scan src/broken.tsx" in result.output
