"""Tests for the ``create-dapp doctor`` command (cli/doctor.py).

All external tools (git, node, package managers) are mocked — no system
dependency, no internet.

Coverage:
* Doctor runs and returns SUCCESS when everything is present.
* Missing tools warn; missing templates fail.
* Individual check functions return correct tuples.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from create_dapp.cli import exit_codes
from create_dapp.config import Settings
from create_dapp.infra.tool_detector import ToolStatus


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _found(name: str) -> ToolStatus:
    return ToolStatus(
        name=name,
        found=True,
        path=Path(f"/usr/bin/{name}"),
        install_commands=(),
    )


def _missing(name: str) -> ToolStatus:
    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=(f"brew install {name}",),
    )


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from create_dapp.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert "." in value
        assert "OK" in status


class TestToolCheck:
    def test_found(self) -> None:
        from create_dapp.cli.doctor import _tool_check

        label, value, status = _tool_check(_found("git"))
        assert label == "git"
        assert value == str(Path("/usr/bin/git"))
        assert "OK" in status

    def test_missing_required_tool_warns(self) -> None:
        from create_dapp.cli.doctor import _tool_check

        _, value, status = _tool_check(_missing("node"))
        assert value == "not found"
        assert "WARN" in status

    def test_missing_optional_manager(self) -> None:
        from create_dapp.cli.doctor import _tool_check

        _, _, status = _tool_check(_missing("pnpm"))
        assert "OPTIONAL" in status


class TestTemplatesCheck:
    def test_lists_templates(self, templates_root: Path) -> None:
        from create_dapp.cli.doctor import _templates_check

        label, value, status = _templates_check(Settings(templates_dir=templates_root))
        assert label == "templates"
        assert value == "basic, react-hardhat"
        assert "OK" in status

    def test_no_templates_fails(self, tmp_path: Path) -> None:
        from create_dapp.cli.doctor import _templates_check

        _, _, status = _templates_check(Settings(templates_dir=tmp_path / "none"))
        assert "FAIL" in status


class TestOsCheck:
    @patch("create_dapp.cli.doctor.platform.machine", return_value="arm64")
    @patch("create_dapp.cli.doctor.platform.release", return_value="23.4.0")
    @patch("create_dapp.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from create_dapp.cli.doctor import _os_check

        label, value, _ = _os_check()
        assert label == "OS"
        assert value == "macOS 23.4.0 (arm64)"


class TestCreateDappVersionCheck:
    def test_returns_current_version(self) -> None:
        from create_dapp import __version__
        from create_dapp.cli.doctor import _createdapp_version_check

        assert _createdapp_version_check() == ("create-dapp", __version__, "OK")


# ---------------------------------------------------------------------------
# run_doctor
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @patch("create_dapp.cli.doctor.detect_tool", side_effect=_found)
    def test_all_pass_returns_success(self, _mock_detect: MagicMock) -> None:
        from create_dapp.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.SUCCESS

    @patch("create_dapp.cli.doctor.detect_tool", side_effect=_missing)
    def test_missing_tools_still_succeed(self, _mock_detect: MagicMock) -> None:
        """Missing tools are WARN, not FAIL — the matching steps fail on their own."""
        from create_dapp.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.SUCCESS

    @patch("create_dapp.cli.doctor.detect_tool", side_effect=_found)
    def test_missing_templates_fail(self, _mock_detect: MagicMock, tmp_path: Path) -> None:
        from create_dapp.cli.doctor import run_doctor

        code = run_doctor(Settings(templates_dir=tmp_path / "none"))
        assert code == exit_codes.GENERAL_ERROR

    @patch("create_dapp.cli.doctor.platform.system", return_value="Darwin")
    @patch("create_dapp.cli.doctor.detect_tool", side_effect=_missing)
    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_plain_output_shows_macos_and_guidance(
        self,
        _mock_detect: MagicMock,
        _mock_system: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from create_dapp.cli.doctor import run_doctor

        _ = run_doctor()
        err = capsys.readouterr().err
        assert "create-dapp doctor" in err
        assert "macOS" in err
        assert "brew install git" in err
        # Optional managers never get install guidance.
        assert "brew install pnpm" not in err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("create_dapp.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from create_dapp.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.SUCCESS
        mock_run.assert_called_once()

    @patch("create_dapp.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, mock_run: MagicMock) -> None:
        from create_dapp.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.GENERAL_ERROR
