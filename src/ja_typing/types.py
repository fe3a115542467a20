"""カスタム型定義。

このモジュールは、タイピング判定エンジンのドメイン固有の型とバリデーションを提供する。
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field, model_validator

# かなの先読みが無いことを表す番兵
NO_KANA = ""

# 「ん」の単独「n」パターンは、確定するまでかなを消費しない
TENTATIVE_KANA_LENGTH = 0

# 1回の入力は必ず1文字
InputChar = Annotated[
    str,
    Field(
        min_length=1,
        max_length=1,
        description="入力された1文字",
    ),
]


class CandidateKind(str, Enum):
    """ローマ字候補がどの準備処理から生まれたかを表すタグ。"""

    LITERAL = "literal"  # ASCII文字のそのまま入力
    KANA = "kana"  # かな1文字のパターン
    DIGRAPH = "digraph"  # かな2文字（拗音など）のパターン
    SOKUON = "sokuon"  # 「っ」の子音重ね
    MORAIC_N = "moraic_n"  # 「ん」の単独「n」
    SHARED_N = "shared_n"  # 「nn」の2文字目を次のかなの先頭と共有


class MatchStatus(str, Enum):
    """1文字の入力判定結果。"""

    REJECTED = "rejected"
    ADVANCED = "advanced"
    COMPLETED = "completed"


class KanaUnit(BaseModel):
    """かな1文字と、拗音判定のための次のかなのペア（Value Object）。

    辞書のキーとして使えるようにイミュータブルかつハッシュ可能にする。
    """

    kana: str = Field(min_length=1, max_length=1, description="対象のかな")
    next_kana: str = Field(default=NO_KANA, max_length=1, description="次のかな（無ければ空）")

    model_config = {"frozen": True}

    @property
    def has_next(self) -> bool:
        return self.next_kana != NO_KANA

    def first(self) -> "KanaUnit":
        """先読みを外した1文字だけのユニットを返す。"""
        if not self.has_next:
            return self
        return KanaUnit(kana=self.kana)


class RomajiCandidate(BaseModel):
    """入力候補となるローマ字パターン。

    kana_lengthは入力完了時に消費するかなの数（1, 2, または仮確定の0）。
    """

    spelling: str = Field(min_length=1, max_length=4, description="ローマ字表記")
    kana_length: Annotated[int, Field(ge=TENTATIVE_KANA_LENGTH, le=2)] = Field(
        default=1, description="消費するかなの数"
    )
    kind: CandidateKind = Field(default=CandidateKind.KANA, description="候補の種類")

    model_config = {"frozen": True}

    @property
    def is_tentative(self) -> bool:
        return self.kana_length == TENTATIVE_KANA_LENGTH

    def __len__(self) -> int:
        return len(self.spelling)


class MatchResult(BaseModel):
    """RomajiMatcher.try_match()の結果。

    statusがCOMPLETEDのときだけcandidateに完了したパターンが入る。
    """

    status: MatchStatus
    candidate: RomajiCandidate | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_candidate(self) -> "MatchResult":
        if self.status is MatchStatus.COMPLETED and self.candidate is None:
            raise ValueError("COMPLETED result requires a candidate")
        return self

    @property
    def accepted(self) -> bool:
        return self.status is not MatchStatus.REJECTED


class TypingSnapshot(BaseModel):
    """表示層に渡すセッションの状態のスナップショット。"""

    kana_text: str = Field(description="対象のかな文字列")
    inputed_kana_length: int = Field(ge=0, description="確定済みのかなの数")
    valid_input: str = Field(description="有効な入力文字列")
    full_romaji_pattern: str = Field(description="現在の状態のフルサイズローマ字パターン")
    permitted_patterns: tuple[str, ...] = Field(default=(), description="入力判定中のパターン")
    is_complete: bool = Field(description="入力が完了したか")

    model_config = {"frozen": True}

    @property
    def inputed_kana(self) -> str:
        return self.kana_text[: self.inputed_kana_length]

    @property
    def remaining_kana(self) -> str:
        return self.kana_text[self.inputed_kana_length :]

    def to_dict(self) -> dict[str, Any]:
        """表示層向けに辞書に変換する。

        Returns:
            フィールド名をキーとする辞書（permitted_patternsはリスト）
        """
        data = self.model_dump()
        data["permitted_patterns"] = list(self.permitted_patterns)
        return data
