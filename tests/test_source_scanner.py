"""Tests for source discovery and pre-model filters."""

import pytest

from ts2java.config import GeneratorConfig
from ts2java.errors import SourceRootError
from ts2java.parser.models import SourceEnum, SourceFile, SourceInterface, SourceModel
from ts2java.scanner.paths import SourceRoots, matches_dir
from ts2java.scanner.sources import SourceScanner


def test_scan_collects_ts_files_sorted(tmp_path, write_ts):
    write_ts("types/b/B.ts", "")
    write_ts("types/a/A.ts", "")
    write_ts("types/a/A.d.ts", "")
    write_ts("types/node_modules/x/X.ts", "")
    write_ts("types/readme.md", "")

    scanner = SourceScanner(GeneratorConfig(), SourceRoots([tmp_path / "types"]))
    files = scanner.scan()

    assert [f.relative_to(tmp_path).as_posix() for f in files] == ["types/a/A.ts", "types/b/B.ts"]


def test_scan_honours_gitignore(tmp_path, write_ts):
    write_ts("types/keep/K.ts", "")
    write_ts("types/generated/G.ts", "")
    (tmp_path / "types" / ".gitignore").write_text("generated/\n")

    files = SourceScanner(GeneratorConfig(), SourceRoots([tmp_path / "types"])).scan()

    assert [f.name for f in files] == ["K.ts"]


def test_scan_reads_utf8_gitignore(tmp_path, write_ts):
    write_ts("types/keep/K.ts", "")
    write_ts("types/generated/G.ts", "")
    (tmp_path / "types" / ".gitignore").write_text("# généré automatiquement\ngenerated/\n", encoding="utf-8")

    files = SourceScanner(GeneratorConfig(), SourceRoots([tmp_path / "types"])).scan()

    assert [f.name for f in files] == ["K.ts"]


def test_missing_root_is_fatal(tmp_path):
    scanner = SourceScanner(GeneratorConfig(), SourceRoots([tmp_path / "missing"]))
    with pytest.raises(SourceRootError):
        scanner.scan()


def test_filter_excluded_dirs(tmp_path):
    root = tmp_path / "src"
    roots = SourceRoots([root])
    model = SourceModel(
        files=[
            SourceFile(path=str(root / "legacy" / "A.ts")),
            SourceFile(path=str(root / "game" / "legacy" / "old" / "B.ts")),
            SourceFile(path=str(root / "game" / "C.ts")),
            SourceFile(path=str(root / "legacyish" / "D.ts")),
        ]
    )
    scanner = SourceScanner(GeneratorConfig(excludeDirSuffixes=["legacy"]), roots)

    assert scanner.filter_excluded_dirs(model) == 2
    assert [f.path.rsplit("/", 1)[-1] for f in model.files] == ["C.ts", "D.ts"]


def test_remove_ignored_items():
    model = SourceModel(
        files=[
            SourceFile(
                path="a.ts",
                interfaces=[SourceInterface(name="Keep"), SourceInterface(name="Drop")],
                enums=[SourceEnum(name="Drop")],
            )
        ]
    )
    scanner = SourceScanner(GeneratorConfig(ignoreTsItems=["Drop"]), SourceRoots([]))

    assert scanner.remove_ignored_items(model) == 2
    assert [i.name for i in model.files[0].interfaces] == ["Keep"]
    assert model.files[0].enums == []


@pytest.mark.parametrize(
    "rel,suffix,expected",
    [
        ("legacy", "legacy", True),
        ("a/legacy", "legacy", True),
        ("legacy/a", "legacy", True),
        ("a/legacy/b", "legacy", True),
        ("a/legacyish", "legacy", False),
        (None, "legacy", False),
        ("a/b", "a/b", True),
    ],
)
def test_matches_dir(rel, suffix, expected):
    assert matches_dir(rel, suffix) is expected


def test_source_roots_relative_dirs(tmp_path):
    roots = SourceRoots([tmp_path / "src" / "types", tmp_path / "src" / "other"])
    file_path = tmp_path / "src" / "types" / "sub" / "A.ts"

    assert roots.common == (tmp_path / "src").resolve()
    assert roots.relative_dir(file_path) == "sub"
    assert roots.common_relative_dir(file_path) == "types/sub"
    assert roots.relative_dir(tmp_path / "src" / "types" / "A.ts") is None
