import os

from common.file_utils import (
    CopyResult,
    clear_directory_contents,
    copy_tree_no_clobber,
    directory_has_entries,
    replace_with_symlink,
)


def test_directory_has_entries(tmp_path):
    assert directory_has_entries(tmp_path / "missing") is False
    assert directory_has_entries(tmp_path) is False

    (tmp_path / ".hidden").write_text("x")
    assert directory_has_entries(tmp_path) is True


def test_directory_has_entries_on_file(tmp_path):
    regular = tmp_path / "file"
    regular.write_text("x")
    assert directory_has_entries(regular) is False


def test_copy_tree_no_clobber_copies_nested_tree(tmp_path):
    source = tmp_path / "src"
    (source / "tessdata" / "configs").mkdir(parents=True)
    (source / "tessdata" / "eng.traineddata").write_bytes(b"eng")
    (source / "tessdata" / "configs" / "pdf").write_text("tessedit")
    target = tmp_path / "dst"

    result = copy_tree_no_clobber(source, target)

    assert (target / "tessdata" / "eng.traineddata").read_bytes() == b"eng"
    assert (target / "tessdata" / "configs" / "pdf").read_text() == "tessedit"
    assert result == CopyResult(copied=4, skipped=0)


def test_copy_tree_no_clobber_keeps_existing_files(tmp_path):
    source = tmp_path / "src"
    (source / "tessdata").mkdir(parents=True)
    (source / "tessdata" / "eng.traineddata").write_bytes(b"image default")
    (source / "tessdata" / "osd.traineddata").write_bytes(b"osd")
    target = tmp_path / "dst"
    (target / "tessdata").mkdir(parents=True)
    (target / "tessdata" / "eng.traineddata").write_bytes(b"user provided")

    result = copy_tree_no_clobber(source, target)

    assert (target / "tessdata" / "eng.traineddata").read_bytes() == b"user provided"
    assert (target / "tessdata" / "osd.traineddata").read_bytes() == b"osd"
    assert result == CopyResult(copied=1, skipped=1)


def test_copy_tree_no_clobber_preserves_mode_and_mtime(tmp_path):
    source = tmp_path / "src"
    source.mkdir()
    script = source / "run.sh"
    script.write_text("#!/bin/sh\n")
    os.chmod(script, 0o750)
    os.utime(script, (1_000_000, 1_000_000))
    target = tmp_path / "dst"

    copy_tree_no_clobber(source, target)

    copied = target / "run.sh"
    assert copied.stat().st_mode & 0o777 == 0o750
    assert copied.stat().st_mtime == 1_000_000


def test_copy_tree_no_clobber_copies_symlinks_as_links(tmp_path):
    source = tmp_path / "src"
    (source / "real").mkdir(parents=True)
    (source / "real" / "data").write_text("d")
    os.symlink("real", source / "alias")
    os.symlink("real/data", source / "data-link")
    target = tmp_path / "dst"

    copy_tree_no_clobber(source, target)

    assert (target / "alias").is_symlink()
    assert os.readlink(target / "alias") == "real"
    assert (target / "data-link").is_symlink()
    assert (target / "data-link").read_text() == "d"


def test_copy_tree_no_clobber_keeps_existing_symlink(tmp_path):
    source = tmp_path / "src"
    source.mkdir()
    (source / "eng.traineddata").write_text("default")
    target = tmp_path / "dst"
    target.mkdir()
    (target / "custom").write_text("custom")
    os.symlink("custom", target / "eng.traineddata")

    result = copy_tree_no_clobber(source, target)

    assert os.readlink(target / "eng.traineddata") == "custom"
    assert result.skipped == 1


def test_clear_directory_contents(tmp_path):
    lists_dir = tmp_path / "lists"
    (lists_dir / "partial").mkdir(parents=True)
    (lists_dir / "partial" / "x").write_text("x")
    (lists_dir / "deb.debian.org_Packages").write_text("p")
    (lists_dir / "lock").write_text("")

    removed = clear_directory_contents(lists_dir)

    assert removed == 3
    assert lists_dir.is_dir()
    assert list(lists_dir.iterdir()) == []


def test_clear_directory_contents_does_not_follow_links(tmp_path):
    keep = tmp_path / "keep"
    keep.mkdir()
    (keep / "file").write_text("k")
    lists_dir = tmp_path / "lists"
    lists_dir.mkdir()
    os.symlink(keep, lists_dir / "link")

    clear_directory_contents(lists_dir)

    assert (keep / "file").exists()
    assert not os.path.lexists(lists_dir / "link")


def test_clear_directory_contents_missing_directory(tmp_path):
    assert clear_directory_contents(tmp_path / "missing") == 0


def test_replace_with_symlink_same_directory_is_relative(tmp_path):
    app_jar = tmp_path / "app.jar"
    app_jar.write_bytes(b"stock")
    security_jar = tmp_path / "app-security.jar"
    security_jar.write_bytes(b"secure")

    replace_with_symlink(app_jar, security_jar)

    assert app_jar.is_symlink()
    assert os.readlink(app_jar) == "app-security.jar"
    assert app_jar.read_bytes() == b"secure"
    assert not os.path.lexists(tmp_path / ".app.jar.tmp")


def test_replace_with_symlink_when_link_missing(tmp_path):
    security_jar = tmp_path / "app-security.jar"
    security_jar.write_bytes(b"secure")

    replace_with_symlink(tmp_path / "app.jar", security_jar)

    assert (tmp_path / "app.jar").resolve() == security_jar.resolve()


def test_replace_with_symlink_other_directory(tmp_path):
    (tmp_path / "downloads").mkdir()
    security_jar = tmp_path / "downloads" / "app-security.jar"
    security_jar.write_bytes(b"secure")
    (tmp_path / "bin").mkdir()
    app_jar = tmp_path / "bin" / "app.jar"
    os.symlink("elsewhere.jar", app_jar)

    replace_with_symlink(app_jar, security_jar)

    assert os.readlink(app_jar) == str(security_jar)
    assert app_jar.read_bytes() == b"secure"
