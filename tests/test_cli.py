import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from bto.cli import main
from bto.config import APPLICANT_FILE

SAMPLE_DIR = Path(__file__).parent.parent / "data"


@pytest.fixture
def data_dir(tmp_path):
    target = tmp_path / "data"
    shutil.copytree(SAMPLE_DIR, target)
    return target


@pytest.fixture
def runner():
    return CliRunner()


def test_quit_immediately(runner, data_dir):
    result = runner.invoke(main, ["--data-dir", str(data_dir), "--no-save"], input="\n")
    assert result.exit_code == 0, result.output
    assert "BTO HOUSING MANAGEMENT SYSTEM" in result.output


def test_applicant_login_and_view_applications(runner, data_dir):
    keys = "S1234567A\npassword\n4\n0\n\n"
    result = runner.invoke(main, ["--data-dir", str(data_dir), "--no-save"], input=keys)
    assert result.exit_code == 0, result.output
    assert "Welcome, John" in result.output
    assert "BTO-APP-000000000002" in result.output


def test_wrong_password(runner, data_dir):
    result = runner.invoke(main, ["--data-dir", str(data_dir), "--no-save"],
                           input="S1234567A\nnope\n\n")
    assert result.exit_code == 0
    assert "Incorrect password" in result.output


def test_save_writes_files(runner, tmp_path):
    empty = tmp_path / "fresh"
    result = runner.invoke(main, ["--data-dir", str(empty)], input="\n")
    assert result.exit_code == 0, result.output
    assert (empty / APPLICANT_FILE).read_text().startswith("Name,NRIC,Age")
