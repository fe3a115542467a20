"""ローマ字パターンの入力判定。

reset()後、add_candidate()で追加された順番がパターンの優先度になる。
"""

from collections.abc import Iterator

from ja_typing.types import CandidateKind, MatchResult, MatchStatus, RomajiCandidate

_REJECTED = MatchResult(status=MatchStatus.REJECTED)
_ADVANCED = MatchResult(status=MatchStatus.ADVANCED)


class RomajiMatcher:
    """
    入力中のかなに対して有効なローマ字パターンを管理するクラス。

    全ての有効なパターンは共通の入力位置を持ち、その位置より前の
    文字はすべて入力済みの文字と一致している。
    """

    def __init__(self) -> None:
        self._candidates: list[RomajiCandidate] = []
        self._index = 0
        self._is_complete = False

    @property
    def is_empty(self) -> bool:
        return not self._candidates

    @property
    def is_complete(self) -> bool:
        return self._is_complete

    @property
    def consumed_char_count(self) -> int:
        """現在のパターンに対して入力済みの文字数。"""
        return self._index

    def spellings(self) -> Iterator[str]:
        """有効なパターンのローマ字を優先度順に返す。"""
        for candidate in self._candidates:
            yield candidate.spelling

    def accepts(self, input_char: str) -> bool:
        """input_charが現在の入力位置でいずれかのパターンに一致するか。状態は変えない。"""
        return any(c.spelling[self._index] == input_char for c in self._candidates)

    def reset(self) -> None:
        self._candidates = []
        self._index = 0
        self._is_complete = False

    def add_candidate(
        self, spelling: str, kana_length: int, kind: CandidateKind = CandidateKind.KANA
    ) -> None:
        """
        パターンを末尾（最も低い優先度）に追加する。

        Args:
            spelling: ローマ字表記
            kana_length: 入力完了時に消費するかなの数
            kind: 候補の種類

        Raises:
            ValidationError: spellingやkana_lengthが範囲外の場合
        """
        self._candidates.append(
            RomajiCandidate(spelling=spelling, kana_length=kana_length, kind=kind)
        )

    def top_priority(self) -> RomajiCandidate:
        """
        候補の中で最も優先度の高いパターンを取得する。

        Raises:
            RuntimeError: 候補が無い、または入力が完了している場合
        """
        if self._is_complete or not self._candidates:
            raise RuntimeError("No pattern is being matched")
        return self._candidates[0]

    def try_match(self, input_char: str) -> MatchResult:
        """
        入力された文字がパターンにマッチするかを判定する。

        アルゴリズム:
        1. 優先度順に、現在の入力位置の文字がinput_charと一致するパターンを探す
        2. 一致したパターンが最後の文字だった場合、そのパターンで完了する
        3. 完了しなかったが一致があれば、一致しないパターンを除外して位置を進める
        4. 一致が無ければ状態を変えずにREJECTEDを返す

        Args:
            input_char: 入力された1文字

        Returns:
            MatchResult: REJECTED / ADVANCED / COMPLETED（完了したパターン付き）
        """
        is_matched = False

        for candidate in self._candidates:
            if candidate.spelling[self._index] != input_char:
                continue
            is_matched = True

            # パターン最後の入力だった場合
            if self._index + 1 == len(candidate.spelling):
                self._is_complete = True
                return MatchResult(status=MatchStatus.COMPLETED, candidate=candidate)

        if not is_matched:
            return _REJECTED

        # 候補から外れたパターンを削除
        self._candidates = [c for c in self._candidates if c.spelling[self._index] == input_char]
        self._index += 1
        return _ADVANCED

    def __len__(self) -> int:
        return len(self._candidates)
