from pathlib import Path

import pytest

from src.platform.exception.exceptions import PersistenceUnavailableError
from src.platform.storage.json_snapshot import CorruptSnapshotError, JsonSnapshotFile


@pytest.mark.unit
class TestJsonSnapshotFile:
    def test_missing_and_blank_files_read_as_none(self, tmp_path: Path) -> None:
        blank = tmp_path / 'blank.json'
        blank.write_text('  \n')

        assert JsonSnapshotFile(tmp_path / 'missing.json').read() is None
        assert JsonSnapshotFile(blank).read() is None

    def test_write_then_read(self, tmp_path: Path) -> None:
        snapshot = JsonSnapshotFile(tmp_path / 'nested' / 'data.json')

        snapshot.write([{'name': 'Iced Tea', 'stock': 7}])

        assert snapshot.exists()
        assert snapshot.read() == [{'name': 'Iced Tea', 'stock': 7}]
        assert not (tmp_path / 'nested' / 'data.json.tmp').exists()

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / 'data.json'
        path.write_text('{not json')

        with pytest.raises(CorruptSnapshotError):
            JsonSnapshotFile(path).read()

    def test_failed_write_keeps_previous_snapshot(self, tmp_path: Path) -> None:
        path = tmp_path / 'data.json'
        snapshot = JsonSnapshotFile(path)
        snapshot.write({'version': 1})

        with pytest.raises(PersistenceUnavailableError):
            snapshot.write({'version': object()})

        assert snapshot.read() == {'version': 1}
