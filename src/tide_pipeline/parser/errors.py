"""パーサー層の例外定義"""


class MissingTodayDataError(ValueError):
    """本日のデータ行が見つからない場合に送出される例外

    ページ構成の変更を調査できるよう、期待したセル数と実際に見つかったセル数を保持する。
    """

    def __init__(self, expected: int, found: int):
        super().__init__(
            f"Expected {expected} cells in today's data row, found {found}"
        )
        self.expected = expected
        self.found = found
