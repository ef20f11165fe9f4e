"""BaseConverterおよびConversionResultのテスト"""

from pathlib import Path

import pytest

from truevision.converter.base import BaseConverter, ConversionResult, ConversionStatus


class _CopyConverter(BaseConverter):
    """テスト用の最小Converter"""

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt",)

    def can_convert(self, file_path: Path) -> bool:
        return file_path.suffix in self.supported_extensions

    def convert(self, source: Path, dest: Path) -> ConversionResult:
        self._validate_source(source)
        dest.write_bytes(source.read_bytes())
        return ConversionResult(
            source_path=source,
            dest_path=dest,
            status=ConversionStatus.SUCCESS,
            bytes_before=self._get_file_size(source),
            bytes_after=self._get_file_size(dest),
        )


class TestConversionResult:
    """ConversionResultのテスト"""

    @pytest.mark.parametrize(
        "status, expected",
        [
            pytest.param(ConversionStatus.SUCCESS, True, id="成功"),
            pytest.param(ConversionStatus.SKIPPED, False, id="スキップ"),
            pytest.param(ConversionStatus.FAILED, False, id="失敗"),
        ],
    )
    def test_is_success(self, status: ConversionStatus, expected: bool) -> None:
        result = ConversionResult(source_path=Path("a"), dest_path=None, status=status)
        assert result.is_success is expected


class TestBaseConverter:
    """BaseConverterの共通処理のテスト"""

    def test_validate_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            _CopyConverter().convert(tmp_path / "missing.txt", tmp_path / "out.txt")

    def test_validate_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="ファイルである必要があります"):
            _CopyConverter().convert(tmp_path, tmp_path / "out.txt")

    def test_default_output_extension(self) -> None:
        assert _CopyConverter().get_output_extension(Path("a.txt")) is None
