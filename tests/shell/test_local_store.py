"""Tests for local document persistence using a temporary directory."""

from nutritrack.shell.local_store import LocalStore


class TestLocalStore:
    """Tests for LocalStore."""

    def test_missing_file_loads_none(self, tmp_path):
        """No document on disk means defaults."""
        assert LocalStore(tmp_path / "nutritrack.json").load() is None

    def test_save_then_load(self, tmp_path):
        """Saved text is read back unchanged."""
        store = LocalStore(tmp_path / "nutritrack.json")

        assert store.save('{"profile": {"name": "Lan"}}') is True
        assert store.load() == '{"profile": {"name": "Lan"}}'

    def test_save_creates_directory(self, tmp_path):
        """The data directory is created on first save."""
        store = LocalStore(tmp_path / "nested" / "dir" / "nutritrack.json")
        assert store.save("{}") is True
        assert store.path.exists()

    def test_save_leaves_no_temp_files(self, tmp_path):
        """Only the document remains after a save."""
        store = LocalStore(tmp_path / "nutritrack.json")
        store.save("{}")
        store.save('{"logs": {}}')
        assert [p.name for p in tmp_path.iterdir()] == ["nutritrack.json"]

    def test_save_failure_returns_false(self, tmp_path):
        """A path that can't be written reports failure instead of raising."""
        blocker = tmp_path / "blocker"
        blocker.write_text("I am a file")
        store = LocalStore(blocker / "nutritrack.json")

        assert store.save("{}") is False

    def test_clear(self, tmp_path):
        """Clearing deletes the document; clearing twice is fine."""
        store = LocalStore(tmp_path / "nutritrack.json")
        store.save("{}")

        assert store.clear() is True
        assert store.load() is None
        assert store.clear() is True

    def test_quarantine_moves_document_aside(self, tmp_path):
        """The invalid document is kept next to the original name."""
        store = LocalStore(tmp_path / "nutritrack.json")
        store.save("{broken")

        aside = store.quarantine()

        assert aside == tmp_path / "nutritrack.json.corrupt"
        assert aside.read_text(encoding="utf-8") == "{broken"
        assert store.load() is None

    def test_quarantine_without_document(self, tmp_path):
        """Nothing to move gives None."""
        assert LocalStore(tmp_path / "nutritrack.json").quarantine() is None
