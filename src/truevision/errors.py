"""TGAデコードの例外定義

デコード処理で発生するエラーを分類した例外階層を定義する。
入出力に起因するエラー(SourceError)は構築処理を中断し、
フォーマット不正(FormatError)は記録のみ行われる。
"""


class TGAError(Exception):
    """TGAデコードエラーの基底クラス"""

    pass


class SourceError(TGAError):
    """入力ソースの読み取りエラー

    読み取り不可、シーク不可、シーク失敗などのI/Oエラー。
    """

    pass


class TruncatedHeader(SourceError):
    """ヘッダーが18バイトに満たない"""

    pass


class FooterReadError(SourceError):
    """フッターの読み取りに失敗した"""

    pass


class FormatError(TGAError):
    """未対応の画像タイプまたはピクセル深度"""

    pass


class PaletteError(TGAError):
    """カラーマップ関連のエラー"""

    pass


class UnsupportedColorMapDepth(PaletteError):
    """カラーマップのエントリ深度が未対応"""

    def __init__(self, depth: int) -> None:
        super().__init__(f"カラーマップの深度が未対応です: {depth}")
        self.depth = depth


class IndexOutOfRange(PaletteError):
    """パレットインデックスがカラーマップの範囲外"""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"パレットインデックスが範囲外です: {index} (長さ {length})")
        self.index = index
        self.length = length


class DecodeTruncation(TGAError):
    """ピクセルデータが途中で終わっている（strictモードのみ送出）"""

    pass


class TruncatedSample(DecodeTruncation):
    """サンプルのバイト数が不足している"""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"サンプルデータが不足しています: {actual}/{expected}バイト")
        self.expected = expected
        self.actual = actual


class TruncatedStream(DecodeTruncation):
    """RLEパケットがラスター充填前に尽きた"""

    def __init__(self, written: int, total: int) -> None:
        super().__init__(f"RLEデータが途中で終了しました: {written}/{total}ピクセル")
        self.written = written
        self.total = total
