from nhostcli.system import add_to_gitignore


def test_creates_file(tmp_path):
    target = tmp_path / ".gitignore"
    add_to_gitignore(".nhost\n", target)
    assert target.read_text() == ".nhost\n"


def test_appends_to_existing(tmp_path):
    target = tmp_path / ".gitignore"
    target.write_text("node_modules\n")
    add_to_gitignore(".nhost\n", target)
    assert target.read_text() == "node_modules\n.nhost\n"


def test_does_not_duplicate(tmp_path):
    target = tmp_path / ".gitignore"
    add_to_gitignore(".secrets\n", target)
    add_to_gitignore(".secrets\n", target)
    assert target.read_text().count(".secrets") == 1


def test_substring_already_present_is_skipped(tmp_path):
    target = tmp_path / ".gitignore"
    target.write_text("a/.nhost/data\n")
    add_to_gitignore(".nhost", target)
    assert target.read_text() == "a/.nhost/data\n"