import pytest

from octools.paths import CUR_DIR, PARENT_DIR, ROOT_DIR, Component, Path


def test_component_to_str_for_special_components():
    assert ROOT_DIR.to_str() == "/"
    assert CUR_DIR.to_str() == "."
    assert PARENT_DIR.to_str() == ".."
    assert Component.normal("name").to_str() == "name"


@pytest.mark.parametrize("first,second", [("usr", "bin"), ("a", "b")])
def test_components_of_absolute_path(first, second):
    path = Path("/").join(first).join(second)
    assert list(path.components()) == [
        ROOT_DIR,
        Component.normal(first),
        Component.normal(second),
    ]


def test_components_skip_empty_and_dot_segments():
    comps = list(Path("a//./b/").components())
    assert comps == [Component.normal("a"), Component.normal("b")]


def test_leading_dot_becomes_cur_dir():
    assert list(Path("./a").components()) == [CUR_DIR, Component.normal("a")]


def test_parent_dir_component():
    assert list(Path("../a").components()) == [PARENT_DIR, Component.normal("a")]


@pytest.mark.parametrize("text", ["/usr/lib/x", "./a/b", "a//b/../c", "x", "/", ""])
def test_backward_iteration_mirrors_forward(text):
    forward = list(Path(text).components())
    backward = list(Path(text).components().reversed())
    assert backward == forward[::-1]


def test_next_back_returns_none_when_exhausted():
    comps = Path("").components()
    assert comps.next_back() is None


def test_root_and_relative():
    assert Path("/x").has_root()
    assert Path("/x").is_absolute()
    assert Path("x").is_relative()
    assert not Path("").has_root()


def test_join_relative_adds_separator_once():
    base, name = "dir", "file.txt"
    assert str(Path(base).join(name)) == base + "/" + name
    assert str(Path(base + "/").join(name)) == base + "/" + name


def test_join_absolute_replaces():
    other = "/etc"
    assert Path("dir").join(other) == Path(other)


def test_parent_and_file_name_round_trip():
    base, name = "dir/sub", "file.txt"
    path = Path(base).join(name)
    assert path.file_name() == name
    assert path.parent() == Path(base)


def test_parent_of_root_and_empty_is_none():
    assert Path("/").parent() is None
    assert Path("").parent() is None


def test_file_name_of_parent_dir_is_none():
    assert Path("a/..").file_name() is None


def test_ancestors_follow_parent_chain():
    path = Path("a/b/c")
    chain = list(path.ancestors())
    assert chain[0] == path
    for child, parent in zip(chain, chain[1:]):
        assert child.parent() == parent
    assert chain[-1].parent() is None


def test_file_stem_and_prefix():
    stem, ext = "archive.tar", "gz"
    path = Path("dir").join(f"{stem}.{ext}")
    assert path.file_stem() == stem
    assert path.file_prefix() == stem.split(".")[0]


def test_file_stem_without_dot_is_none():
    assert Path("dir/plain").file_stem() is None
    assert Path("dir/plain").file_prefix() is None


def test_starts_with_and_ends_with():
    base, child = "/usr", "lib/x"
    path = Path(base).join(child)
    assert path.starts_with(base)
    assert path.ends_with(child)
    assert not path.starts_with(child)
    assert not path.ends_with(base)


def test_starts_with_compares_whole_components():
    assert not Path("/usr/lib").starts_with("/us")


def test_equality_is_textual():
    assert Path("a") == Path("a")
    assert Path("a") != Path("a/")


def test_exists_and_is_dir(tmp_path):
    folder = Path(str(tmp_path))
    file_path = folder.join("f.txt")
    assert folder.is_dir()
    assert not file_path.exists()
    (tmp_path / "f.txt").write_text("x", encoding="utf-8")
    assert file_path.exists()
    assert not file_path.is_dir()