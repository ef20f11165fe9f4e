"""スキャンライン書き込みモジュール

ストリーム順の論理座標を、格納原点のフラグに従って出力座標に変換し、
RGBAラスターに書き込む。
"""

from PIL import Image

from truevision.decoder.sample import Color


def empty_image() -> Image.Image:
    """幅0・高さ0のラスターを返す"""
    return Image.new("RGBA", (0, 0))


class ScanlineWriter:
    """ラスターへの書き込みを担当するクラス

    行はストリーム上の先頭行から順に渡される。
    vertical_flipが偽（左下原点）の場合、ストリームの先頭行は出力の最下行になる。

    Attributes:
        width: ラスターの幅
        height: ラスターの高さ
        horizontal_flip: 右から左へ格納されているか
        vertical_flip: 上から下へ格納されているか（左上原点）
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        horizontal_flip: bool = False,
        vertical_flip: bool = False,
    ) -> None:
        self.width = width
        self.height = height
        self.horizontal_flip = horizontal_flip
        self.vertical_flip = vertical_flip
        # 未書き込みのピクセルは(0, 0, 0, 0)
        self._buffer = bytearray(width * height * 4)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def transform(self, x: int, y: int) -> tuple[int, int]:
        """論理座標を出力座標に変換する"""
        out_x = self.width - 1 - x if self.horizontal_flip else x
        out_y = y if self.vertical_flip else self.height - 1 - y
        return out_x, out_y

    def put(self, x: int, y: int, color: Color) -> None:
        """論理座標(x, y)に色を書き込む"""
        out_x, out_y = self.transform(x, y)
        offset = (out_y * self.width + out_x) * 4
        self._buffer[offset : offset + 4] = bytes(color)

    def put_linear(self, cursor: int, color: Color) -> None:
        """ラスター全体を通した論理カーソル位置に色を書き込む"""
        y, x = divmod(cursor, self.width)
        self.put(x, y, color)

    def to_image(self) -> Image.Image:
        """書き込み済みのバッファからPIL Imageを作成する"""
        if self.pixel_count == 0:
            return Image.new("RGBA", (self.width, self.height))
        return Image.frombytes("RGBA", (self.width, self.height), bytes(self._buffer))
