"""例外定義"""


class LZSSError(Exception):
    """ecu-lzss の基底例外"""

    pass


class AllocationFailure(LZSSError):
    """入力全体を保持するバッファを確保できなかった"""

    pass


class IOFailure(LZSSError):
    """入出力ストリームの読み書きに失敗した

    既に書き出された出力は不完全な可能性があり、有効なデータとして扱ってはならない。
    """

    pass


class InvocationError(LZSSError):
    """呼び出し設定が欠けている、または矛盾している"""

    pass
