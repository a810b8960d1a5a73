"""
pytest configuration and fixtures for imgsort tests.
"""

import io
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import piexif
import pytest
from PIL import Image


@dataclass
class CliResult:
    """Result from running CLI command."""
    exit_code: int
    output: str
    error: str


def write_jpeg(path: Path, date_original: Optional[str] = None) -> Path:
    """Write a small JPEG, embedding DateTimeOriginal when given."""
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new("RGB", (16, 16), color=(200, 120, 40))
    if date_original is None:
        image.save(path, "JPEG")
    else:
        exif_bytes = piexif.dump({
            "0th": {},
            "Exif": {piexif.ExifIFD.DateTimeOriginal: date_original.encode("ascii")},
            "GPS": {},
            "1st": {},
            "thumbnail": None,
        })
        image.save(path, "JPEG", exif=exif_bytes)
    return path


@pytest.fixture
def make_jpeg():
    """Factory fixture creating JPEG files with optional capture dates."""
    return write_jpeg


@pytest.fixture
def source_dir(tmp_path):
    """Empty source directory."""
    source = tmp_path / "source"
    source.mkdir()
    return source


@pytest.fixture
def dest_dir(tmp_path):
    """Destination path, not created yet."""
    return tmp_path / "dest"


@pytest.fixture
def test_config_path(tmp_path):
    """Test-specific config path with clean state guarantee."""
    return tmp_path / "config" / "config.yml"


@pytest.fixture
def create_test_files(source_dir, make_jpeg):
    """Helper to create media files inside the source directory."""

    def create_files(file_specs: List[dict]) -> Path:
        """Create test files based on specifications.

        Args:
            file_specs: List of dicts with keys:
                - name: path relative to the source directory
                - date: EXIF DateTimeOriginal string, writes a real JPEG (optional)
                - content: raw file content for files without metadata (optional)

        Returns:
            Path to the source directory
        """
        for spec in file_specs:
            file_path = source_dir / spec['name']
            file_path.parent.mkdir(parents=True, exist_ok=True)

            if 'date' in spec:
                make_jpeg(file_path, spec['date'])
            else:
                content = spec.get('content', b'test file content')
                if isinstance(content, str):
                    file_path.write_text(content)
                else:
                    file_path.write_bytes(content)

        return source_dir

    return create_files


@pytest.fixture
def cli_runner():
    """Create a CLI runner that captures output and uses test config."""

    def run_cli(*args, config_path=None, answer="n"):
        """Run imgsort CLI with given arguments.

        Args:
            *args: Command line arguments (source, dest, --flags, etc)
            config_path: Optional config path for test isolation
            answer: Reply given to the confirmation prompt

        Returns:
            CliResult with exit_code, output, and error
        """
        from imgsort.cli import main
        from imgsort.constants import get_console

        old_stdout = sys.stdout
        old_stderr = sys.stderr
        stdout = io.StringIO()
        stderr = io.StringIO()

        console = get_console()
        console.input = lambda prompt="", **kwargs: answer

        try:
            sys.stdout = stdout
            sys.stderr = stderr

            exit_code = main(config_path=config_path, argv=[str(a) for a in args])

            return CliResult(
                exit_code=exit_code,
                output=stdout.getvalue(),
                error=stderr.getvalue()
            )
        except SystemExit as e:
            # argparse exits on --help and usage errors
            return CliResult(
                exit_code=e.code if e.code is not None else 0,
                output=stdout.getvalue(),
                error=stderr.getvalue()
            )
        finally:
            sys.stdout = old_stdout
            sys.stderr = old_stderr
            del console.input

    return run_cli


@pytest.fixture
def assert_file_structure():
    """Helper to assert expected file structure."""

    def check_structure(base_path: Path, expected_structure: dict):
        """Assert that directory has expected structure.

        Args:
            base_path: Root directory to check
            expected_structure: Dict describing expected structure
                e.g., {
                    "2024": {
                        "January": ["a.jpg", "b.jpg"],
                    },
                    "0": {"Unknown": ["c.jpg"]}
                }
        """
        def check_level(path: Path, structure: dict):
            actual_dirs = sorted(d.name for d in path.iterdir() if d.is_dir())
            expected_dirs = sorted(name for name, value in structure.items()
                                   if isinstance(value, (dict, list)))
            assert actual_dirs == expected_dirs, \
                f"Expected folders {expected_dirs} in {path}, got {actual_dirs}"

            for name, value in structure.items():
                item_path = path / name
                assert item_path.exists(), f"Expected {item_path} to exist"

                if isinstance(value, dict):
                    assert item_path.is_dir(), f"Expected {item_path} to be a directory"
                    check_level(item_path, value)
                elif isinstance(value, list):
                    assert item_path.is_dir(), f"Expected {item_path} to be a directory"
                    actual_files = sorted(f.name for f in item_path.iterdir() if f.is_file())
                    expected_files = sorted(value)
                    assert actual_files == expected_files, \
                        f"Expected files {expected_files} in {item_path}, got {actual_files}"

        check_level(base_path, expected_structure)

    return check_structure


@pytest.fixture
def lock_file():
    """Remove every permission bit from a file for the duration of a test.

    Skips the test when the process can still read the file anyway, which
    is the case for root.
    """
    locked = []

    def lock(path: Path) -> Path:
        path.chmod(0)
        locked.append(path)
        try:
            path.open("rb").close()
        except PermissionError:
            return path
        pytest.skip("Process can read files without permission bits")

    yield lock

    for path in locked:
        path.chmod(0o644)
