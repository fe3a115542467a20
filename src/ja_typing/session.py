"""かな文字列に対するローマ字タイピング入力を判定するセッション。

このモジュールは、1文字ずつの入力を受け取り、有効な入力かを判定しながら
かな文字列のカーソルを進め、入力のたびにフルサイズのローマ字パターンを再生成する。
「っ」の子音重ねと「ん」の単独「n」入力はここで特別に扱う。
"""

import warnings

from pydantic import validate_call

from ja_typing.matcher import RomajiMatcher
from ja_typing.registry import (
    MORAIC_N,
    REDUNDANT_N_BLOCKERS,
    SOKUON,
    KanaRomajiRegistry,
    get_registry,
)
from ja_typing.types import (
    NO_KANA,
    TENTATIVE_KANA_LENGTH,
    CandidateKind,
    InputChar,
    KanaUnit,
    MatchStatus,
    RomajiCandidate,
    TypingSnapshot,
)


def _kana_unit_at(kana_text: str, index: int) -> KanaUnit:
    """index位置のかなと次のかなのペアを取得する。"""
    next_kana = kana_text[index + 1] if index + 1 < len(kana_text) else NO_KANA
    return KanaUnit(kana=kana_text[index], next_kana=next_kana)


def can_input_single_n(next_kana: str, registry: KanaRomajiRegistry | None = None) -> bool:
    """
    次のかなの前で「ん」を単独の「n」で入力できるかを判定する。

    次のかなのパターンのうち1つでも「n」や母音以外で始まれば、
    「n」が次のかなの入力と紛れないので許可する。

    Args:
        next_kana: 「ん」の次のかな
        registry: 参照するレジストリ。Noneの場合、組み込みのレジストリを使用。
    """
    registry = registry or get_registry()
    for spelling in registry.candidates_for(KanaUnit(kana=next_kana)):
        if spelling[0] not in REDUNDANT_N_BLOCKERS:
            return True
    return False


def sokuon_initials(next_kana: str, registry: KanaRomajiRegistry | None = None) -> list[str]:
    """「っ」を次のかなの子音重ねで入力するときの先頭文字を優先度順に返す。"""
    registry = registry or get_registry()
    initials: list[str] = []
    for spelling in registry.candidates_for(KanaUnit(kana=next_kana)):
        if len(spelling) > 1 and spelling[0] not in initials:
            initials.append(spelling[0])
    return initials


def default_romaji(
    kana_text: str,
    start: int = 0,
    registry: KanaRomajiRegistry | None = None,
    initial_filter: str = NO_KANA,
) -> str:
    """
    かな文字列のstart位置以降を、最も優先度の高いローマ字パターンで表記する。

    アルゴリズム:
    1. ASCII文字はそのまま
    2. 「っ」は次のかなの子音を重ねる。次のかなはその文字で始まるパターンで表記する
    3. 「ん」は単独の「n」が許可されていれば「n」
    4. かなペアのパターンがあればそれを使い、次のかなを読み飛ばす
    5. それ以外は1文字のパターン

    Args:
        kana_text: 対象のかな文字列
        start: 表記を始める位置
        registry: 参照するレジストリ。Noneの場合、組み込みのレジストリを使用。
        initial_filter: start位置の直前に「っ」で重ねた文字（無ければ空）

    Returns:
        ローマ字文字列。パターンが見つからないかなは空として扱う。

    Example:
        >>> default_romaji("きょうはいい")
        'kyouhaii'
        >>> default_romaji("がっこう")
        'gakkou'
        >>> default_romaji("っう")
        'wwu'
    """
    registry = registry or get_registry()
    parts: list[str] = []
    i = start

    while i < len(kana_text):
        unit = _kana_unit_at(kana_text, i)
        required, initial_filter = initial_filter, NO_KANA

        if unit.kana.isascii():
            parts.append(unit.kana)
            i += 1
            continue

        # 「っ」「ん」のローマ字パターンをチェック
        if unit.has_next:
            if unit.kana == SOKUON:
                initials = sokuon_initials(unit.next_kana, registry)
                if initials:
                    parts.append(initials[0])
                    initial_filter = initials[0]
                    i += 1
                    continue
            elif unit.kana == MORAIC_N and can_input_single_n(unit.next_kana, registry):
                parts.append("n")
                i += 1
                continue

        # 子音を重ねた後は、その文字で始まるパターンだけが入力できる
        single, digraph = registry.pair_candidates(unit)
        declared = [(romaji, 2) for romaji in digraph] + [(romaji, 1) for romaji in single]
        declared = [(romaji, length) for romaji, length in declared if romaji.startswith(required)]
        if declared:
            romaji, kana_length = declared[0]
            parts.append(romaji)
            i += kana_length
            continue

        warnings.warn(
            f"No romaji pattern found for {unit.kana!r} (next: {unit.next_kana!r})",
            RuntimeWarning,
            stacklevel=2,
        )
        i += 1

    return "".join(parts)


class TypingSession:
    """
    かな文字列のタイピング入力を1文字ずつ判定するセッション。

    状態:
    - 判定中: 現在のかな（とその次のかな）のパターンを判定している
    - 「ん」冗長入力待ち: 「ん」を単独の「n」で入力した直後。もう1つ「n」を
      入力すると「ん」の一部として受け付ける
    - 完了: 残りのかな文字列が空

    Example:
        >>> session = TypingSession("って")
        >>> [session.input(c) for c in "tte"]
        [True, True, True]
        >>> session.is_complete
        True
    """

    def __init__(self, kana_text: str = "", registry: KanaRomajiRegistry | None = None) -> None:
        """
        セッションを初期化する。

        Args:
            kana_text: タイピング対象のかな文字列
            registry: 参照するレジストリ。Noneの場合、組み込みのレジストリを使用。
        """
        self._registry = registry or get_registry()
        self._matcher = RomajiMatcher()
        self.set_target(kana_text)

    def set_target(self, kana_text: str) -> None:
        """
        タイピング対象のかな文字列を設定し、それまでの入力をすべて破棄する。

        入力内容の検証は行わない。パターンの無い文字は表示上空として扱われる。
        """
        self._kana_text = kana_text
        self._position = 0
        self._valid_inputs: list[str] = []
        self._can_input_redundant_n = False
        self._matcher.reset()
        if kana_text:
            self._prepare_matcher(_kana_unit_at(kana_text, 0))
        self._full_romaji_pattern = self._generate_full_romaji_pattern()

    # 状態の参照
    @property
    def kana_text(self) -> str:
        return self._kana_text

    @property
    def is_complete(self) -> bool:
        return self._position >= len(self._kana_text)

    @property
    def inputed_kana_length(self) -> int:
        """確定済みのかなの数。"""
        return self._position

    @property
    def inputed_kana(self) -> str:
        return self._kana_text[: self._position]

    @property
    def remaining_kana(self) -> str:
        """入力していないかな文字列（「ん」の冗長入力待ちの「ん」を含む）。"""
        return self._kana_text[self._position :]

    @property
    def valid_input(self) -> str:
        """set_target以降に受け付けた入力文字列。"""
        return "".join(self._valid_inputs)

    @property
    def full_romaji_pattern(self) -> str:
        """現在の状態のフルサイズローマ字パターン。"""
        return self._full_romaji_pattern

    @property
    def is_redundant_n_pending(self) -> bool:
        return self._can_input_redundant_n

    def permitted_patterns(self) -> tuple[str, ...]:
        """入力判定中のパターンを優先度順に返す。"""
        return tuple(self._matcher.spellings())

    def snapshot(self) -> TypingSnapshot:
        """表示層に渡すための現在の状態を返す。"""
        return TypingSnapshot(
            kana_text=self._kana_text,
            inputed_kana_length=self._position,
            valid_input=self.valid_input,
            full_romaji_pattern=self._full_romaji_pattern,
            permitted_patterns=self.permitted_patterns(),
            is_complete=self.is_complete,
        )

    # 入力
    @validate_call
    def input(self, input_char: InputChar) -> bool:
        """
        入力された1文字を判定する。

        制御文字は呼び出し側で除外すること。

        Args:
            input_char: 入力された1文字

        Returns:
            有効な入力ならTrue。Falseの場合、状態は一切変化しない。

        Raises:
            ValidationError: input_charが1文字でない場合
        """
        if not self._update_state(input_char):
            return False
        self._full_romaji_pattern = self._generate_full_romaji_pattern()
        return True

    def _update_state(self, input_char: str) -> bool:
        # 「ん」の冗長入力の判定。次のかなが「n」で始まる場合（「んん」）はそちらを優先する
        if (
            self._can_input_redundant_n
            and input_char == "n"
            and not self._matcher.accepts(input_char)
        ):
            self._can_input_redundant_n = False
            self._valid_inputs.append(input_char)
            self._position += 1
            return True

        result = self._matcher.try_match(input_char)
        if result.status is MatchStatus.REJECTED:
            return False

        self._valid_inputs.append(input_char)

        if result.status is MatchStatus.ADVANCED:
            # 別の文字が入力されたので「ん」を確定させる
            self._finalize_redundant_n()
            return True

        candidate = result.candidate
        if candidate is None:
            raise RuntimeError("Completed match has no candidate")

        # 「ん」(n)の場合は冗長入力を許可して次のかなのパターンを準備
        if candidate.kind is CandidateKind.MORAIC_N:
            # 「んん」の2つ目を単独の「n」で入力した場合は1つ目を確定させる
            self._finalize_redundant_n()
            self._can_input_redundant_n = True
            self._prepare_matcher(_kana_unit_at(self._kana_text, self._position + 1))
            return True

        self._finalize_redundant_n()
        self._position += candidate.kana_length

        if self.is_complete:
            self._matcher.reset()
        elif candidate.kind is CandidateKind.SOKUON:
            # 子音重ねで入力した文字で次のかなのパターンを絞り込む
            self._prepare_matcher(
                _kana_unit_at(self._kana_text, self._position), initial_filter=input_char
            )
        else:
            self._prepare_matcher(
                _kana_unit_at(self._kana_text, self._position),
                share_n=self._is_double_n(candidate),
            )
        return True

    def _finalize_redundant_n(self) -> None:
        if self._can_input_redundant_n:
            self._can_input_redundant_n = False
            self._position += 1

    def _is_double_n(self, candidate: RomajiCandidate) -> bool:
        """直前に確定したのが「nn」で入力した「ん」かを判定する。"""
        return (
            candidate.kind is CandidateKind.KANA
            and candidate.spelling == "nn"
            and self._kana_text[self._position - 1] == MORAIC_N
        )

    def _prepare_matcher(
        self, unit: KanaUnit, initial_filter: str = NO_KANA, share_n: bool = False
    ) -> None:
        """
        かなユニットのローマ字パターンをマッチャーに登録する。

        Args:
            unit: 現在のかなと次のかなのペア
            initial_filter: 空でなければ、この文字で始まるパターンだけを登録する
            share_n: Trueの場合、「n」で始まるパターンの先頭を省いたものも登録する
        """
        matcher = self._matcher
        matcher.reset()

        if unit.kana.isascii():
            matcher.add_candidate(unit.kana, 1, CandidateKind.LITERAL)
            return

        # 「っ」「ん」のローマ字パターンをチェック
        if unit.has_next:
            if unit.kana == SOKUON:
                for initial in sokuon_initials(unit.next_kana, self._registry):
                    matcher.add_candidate(initial, 1, CandidateKind.SOKUON)
            elif unit.kana == MORAIC_N and can_input_single_n(unit.next_kana, self._registry):
                matcher.add_candidate("n", TENTATIVE_KANA_LENGTH, CandidateKind.MORAIC_N)

        single, digraph = self._registry.pair_candidates(unit)
        # かなペアのパターンを1文字のパターンより優先する
        declared = [(romaji, 2, CandidateKind.DIGRAPH) for romaji in digraph]
        declared += [(romaji, 1, CandidateKind.KANA) for romaji in single]

        for romaji, kana_length, kind in declared:
            if not initial_filter or romaji.startswith(initial_filter):
                matcher.add_candidate(romaji, kana_length, kind)

        if share_n:
            registered = set(matcher.spellings())
            for romaji, kana_length, _ in declared:
                shared = romaji[1:]
                if romaji[0] == "n" and shared and shared not in registered:
                    matcher.add_candidate(shared, kana_length, CandidateKind.SHARED_N)
                    registered.add(shared)

        if matcher.is_empty:
            warnings.warn(
                f"No romaji pattern found for {unit.kana!r} (next: {unit.next_kana!r})",
                RuntimeWarning,
                stacklevel=3,
            )

    def _generate_full_romaji_pattern(self) -> str:
        """現在の入力を考慮したかな文字列全体のローマ字パターンを生成する。"""
        matcher = self._matcher
        consumed = matcher.consumed_char_count
        kana_index = self._position
        initial_filter = NO_KANA

        # 入力済みの文字（入力途中のパターンの分を除く）
        parts = self._valid_inputs[: len(self._valid_inputs) - consumed]

        # パターン入力途中か「っ」を最後に確定した状態なら優先度の高いパターンを追加
        last_kana = self._kana_text[self._position - 1] if self._position > 0 else NO_KANA
        if (
            not matcher.is_empty
            and not matcher.is_complete
            and (consumed > 0 or last_kana == SOKUON)
        ):
            top = matcher.top_priority()
            parts.append(top.spelling)
            # 単独の「n」も表示上は「ん」1文字分
            kana_index += max(top.kana_length, 1)
            if top.kind is CandidateKind.SOKUON:
                initial_filter = top.spelling

        # 「ん」の冗長入力を許可している場合は次の文字を対象にする
        if self._can_input_redundant_n:
            kana_index += 1

        parts.append(
            default_romaji(self._kana_text, kana_index, self._registry, initial_filter)
        )
        return "".join(parts)
