"""Tests for the command line entry point."""
import pytest

from bwdelaunay.cli import build_parser, main, random_points


def test_random_points_reproducible():
    a = random_points(10, seed=3)
    b = random_points(10, seed=3)
    assert a.shape == (10, 2)
    assert (a == b).all()
    assert a.min() >= 0.0 and a.max() < 600.0


def test_requires_a_point_source():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_random_run_with_outputs(tmp_path, capsys):
    vtk = tmp_path / "out.vtk"
    png = tmp_path / "out.png"
    saved = tmp_path / "pts.txt"
    rc = main(['--random', '30', '--seed', '5', '--vtk', str(vtk), '--plot', str(png),
               '--save-points', str(saved), '--stats', '--check', '--log-level', 'WARNING'])
    assert rc == 0
    assert vtk.exists() and png.exists()
    assert len(saved.read_text().splitlines()) == 30
    assert 'triangles' in capsys.readouterr().out


def test_input_file(tmp_path):
    f = tmp_path / "pts.txt"
    f.write_text("0 0\n100 0\n100 100\n0 100\n")
    assert main(['--input', str(f), '--scalar', 'float32', '--log-level', 'ERROR']) == 0


def test_missing_input_file(tmp_path):
    assert main(['--input', str(tmp_path / "nope.txt"), '--log-level', 'CRITICAL']) == 2


def test_negative_random_count():
    assert main(['--random', '-1', '--log-level', 'CRITICAL']) == 2


def test_directory_input_is_an_input_error(tmp_path):
    assert main(['--input', str(tmp_path), '--log-level', 'CRITICAL']) == 2
