"""ひらがなに対応するローマ字パターンの辞書。

テーブルはプロセス内で1度だけ構築され、以後は変更されない。
複数のセッションからロックなしで読み取れる。
"""

from functools import cache
from types import MappingProxyType

from ja_typing.types import KanaUnit

# ローマ字パターンの最長文字数
MAX_ROMAJI_LENGTH = 4

# 1つのかなペアが持ちうる最大のパターン数（余裕を持たせて実際より多い）
MAX_PATTERN_CAPACITY = 16

SOKUON = "っ"
MORAIC_N = "ん"

# 次のかなのパターンがすべてこれらで始まる場合、「ん」を単独の「n」で入力できない
REDUNDANT_N_BLOCKERS = frozenset("naiueo")

# ローマ字の優先順位はタプル内の順番
# キーは1文字（単独のかな）または2文字（拗音などのかなペア）
ROMAJI_TABLE: dict[str, tuple[str, ...]] = {
    "あ": ("a",),
    "い": ("i",),
    "う": ("u", "wu", "whu"),
    "え": ("e",),
    "お": ("o",),
    "か": ("ka", "ca"),
    "き": ("ki",),
    "く": ("ku", "cu", "qu"),
    "け": ("ke",),
    "こ": ("ko", "co"),
    "さ": ("sa",),
    "し": ("si", "ci", "shi"),
    "す": ("su",),
    "せ": ("se", "ce"),
    "そ": ("so",),
    "た": ("ta",),
    "ち": ("ti", "chi"),
    "つ": ("tu", "tsu"),
    "て": ("te",),
    "と": ("to",),
    "な": ("na",),
    "に": ("ni",),
    "ぬ": ("nu",),
    "ね": ("ne",),
    "の": ("no",),
    "は": ("ha",),
    "ひ": ("hi",),
    "ふ": ("fu", "hu"),
    "へ": ("he",),
    "ほ": ("ho",),
    "ま": ("ma",),
    "み": ("mi",),
    "む": ("mu",),
    "め": ("me",),
    "も": ("mo",),
    "や": ("ya",),
    "ゆ": ("yu",),
    "よ": ("yo",),
    "ら": ("ra",),
    "り": ("ri",),
    "る": ("ru",),
    "れ": ("re",),
    "ろ": ("ro",),
    "わ": ("wa",),
    "を": ("wo",),
    # 単独の「n」はセッション側で判定する
    "ん": ("nn", "xn"),
    # 濁音・半濁音
    "が": ("ga",),
    "ぎ": ("gi",),
    "ぐ": ("gu",),
    "げ": ("ge",),
    "ご": ("go",),
    "ざ": ("za",),
    "じ": ("ji", "zi"),
    "ず": ("zu",),
    "ぜ": ("ze",),
    "ぞ": ("zo",),
    "だ": ("da",),
    "ぢ": ("di",),
    "づ": ("zu", "du"),
    "で": ("de",),
    "ど": ("do",),
    "ば": ("ba",),
    "び": ("bi",),
    "ぶ": ("bu",),
    "べ": ("be",),
    "ぼ": ("bo",),
    "ぱ": ("pa",),
    "ぴ": ("pi",),
    "ぷ": ("pu",),
    "ぺ": ("pe",),
    "ぽ": ("po",),
    # 拗音・外来音
    "いぇ": ("ye",),
    "うぁ": ("wha",),
    "うぃ": ("wi", "whi"),
    "うぇ": ("we", "whe"),
    "うぉ": ("who",),
    "ゔ": ("vu",),
    "ゔぁ": ("va",),
    "ゔぃ": ("vi", "vyi"),
    "ゔぇ": ("ve", "vye"),
    "ゔぉ": ("vo",),
    "ゔゃ": ("vya",),
    "ゔゅ": ("vyu",),
    "ゔょ": ("vyo",),
    "きゃ": ("kya",),
    "きぃ": ("kyi",),
    "きゅ": ("kyu",),
    "きぇ": ("kye",),
    "きょ": ("kyo",),
    "くぁ": ("qa", "kwa"),
    "くぃ": ("qi", "kwi"),
    "くぅ": ("kwu",),
    "くぇ": ("qe", "kwe"),
    "くぉ": ("qo", "kwo"),
    "しゃ": ("sya", "sha"),
    "しぃ": ("syi",),
    "しゅ": ("syu", "shu"),
    "しぇ": ("sye", "she"),
    "しょ": ("syo", "sho"),
    "すぁ": ("swa",),
    "すぃ": ("swi",),
    "すぅ": ("swu",),
    "すぇ": ("swe",),
    "すぉ": ("swo",),
    "ちゃ": ("tya", "cha", "cya"),
    "ちぃ": ("tyi", "cyi"),
    "ちゅ": ("tyu", "chu", "cyu"),
    "ちぇ": ("tye", "che", "cye"),
    "ちょ": ("tyo", "cho", "cyo"),
    "つぁ": ("tsa",),
    "つぃ": ("tsi",),
    "つぇ": ("tse",),
    "つぉ": ("tso",),
    "てゃ": ("tha",),
    "てぃ": ("thi",),
    "てゅ": ("thu",),
    "てぇ": ("the",),
    "てょ": ("tho",),
    "とぁ": ("twa",),
    "とぃ": ("twi",),
    "とぅ": ("twu",),
    "とぇ": ("twe",),
    "とぉ": ("two",),
    "にゃ": ("nya",),
    "にぃ": ("nyi",),
    "にゅ": ("nyu",),
    "にぇ": ("nye",),
    "にょ": ("nyo",),
    "ひゃ": ("hya",),
    "ひぃ": ("hyi",),
    "ひゅ": ("hyu",),
    "ひぇ": ("hye",),
    "ひょ": ("hyo",),
    "ふぁ": ("fa", "hwa"),
    "ふぃ": ("fi", "hwi"),
    "ふぇ": ("fe", "hwe"),
    "ふぉ": ("fo", "hwo"),
    "ふゃ": ("fya",),
    "ふゅ": ("fyu", "hwyu"),
    "ふょ": ("fyo",),
    "みゃ": ("mya",),
    "みぃ": ("myi",),
    "みゅ": ("myu",),
    "みぇ": ("mye",),
    "みょ": ("myo",),
    "りゃ": ("rya",),
    "りぃ": ("ryi",),
    "りゅ": ("ryu",),
    "りぇ": ("rye",),
    "りょ": ("ryo",),
    "ぎゃ": ("gya",),
    "ぎぃ": ("gyi",),
    "ぎゅ": ("gyu",),
    "ぎぇ": ("gye",),
    "ぎょ": ("gyo",),
    "ぐぁ": ("gwa",),
    "ぐぃ": ("gwi",),
    "ぐぅ": ("gwu",),
    "ぐぇ": ("gwe",),
    "ぐぉ": ("gwo",),
    "じゃ": ("ja", "jya", "zya"),
    "じぃ": ("jyi", "zyi"),
    "じゅ": ("ju", "jyu", "zyu"),
    "じぇ": ("je", "jye", "zye"),
    "じょ": ("jo", "jyo", "zyo"),
    "ずぁ": ("zwa",),
    "ずぃ": ("zwi",),
    "ずぅ": ("zwu",),
    "ずぇ": ("zwe",),
    "ずぉ": ("zwo",),
    "ぢゃ": ("dya",),
    "ぢぃ": ("dyi",),
    "ぢゅ": ("dyu",),
    "ぢぇ": ("dye",),
    "ぢょ": ("dyo",),
    "でゃ": ("dha",),
    "でぃ": ("dhi",),
    "でゅ": ("dhu",),
    "でぇ": ("dhe",),
    "でょ": ("dho",),
    "どぁ": ("dwa",),
    "どぃ": ("dwi",),
    "どぅ": ("dwu",),
    "どぇ": ("dwe",),
    "どぉ": ("dwo",),
    "びゃ": ("bya",),
    "びぃ": ("byi",),
    "びゅ": ("byu",),
    "びぇ": ("bye",),
    "びょ": ("byo",),
    "ぴゃ": ("pya",),
    "ぴぃ": ("pyi",),
    "ぴゅ": ("pyu",),
    "ぴぇ": ("pye",),
    "ぴょ": ("pyo",),
    # 小書きのかな
    "ぁ": ("la", "xa"),
    "ぃ": ("li", "xi", "lyi", "xyi"),
    "ぅ": ("lu", "xu"),
    "ぇ": ("le", "xe", "lye", "xye"),
    "ぉ": ("lo", "xo"),
    "ゃ": ("lya", "xya"),
    "ゅ": ("lyu", "xyu"),
    "ょ": ("lyo", "xyo"),
    "ゎ": ("lwa", "xwa"),
    "っ": ("xtu", "ltu", "xtsu", "ltsu"),
    "ゐ": ("wyi",),
    "ゑ": ("wye",),
    # 記号
    "ー": ("-",),
    "「": ("[",),
    "」": ("]",),
    "、": (",",),
    "。": (".",),
}


def _to_kana_unit(key: str) -> KanaUnit:
    if len(key) == 1:
        return KanaUnit(kana=key)
    return KanaUnit(kana=key[0], next_kana=key[1])


class KanaRomajiRegistry:
    """
    かなに対応するローマ字パターンを管理するレジストリ。

    構築後は読み取り専用。パターンの順番は優先度を表し、
    使用によって並び替えられることはない。
    """

    def __init__(self, table: dict[str, tuple[str, ...]] | None = None) -> None:
        """
        レジストリを初期化する。

        Args:
            table: かな（1〜2文字）-> ローマ字パターンのマッピング。
                   Noneの場合、組み込みのROMAJI_TABLEを使用。

        Raises:
            ValueError: キーが1〜2文字でない、またはパターンが不正な場合
        """
        source = ROMAJI_TABLE if table is None else table
        entries: dict[KanaUnit, tuple[str, ...]] = {}
        for key, spellings in source.items():
            if not 1 <= len(key) <= 2:
                raise ValueError(f"Kana key must be 1 or 2 characters: {key!r}")
            if len(spellings) > MAX_PATTERN_CAPACITY:
                raise ValueError(f"Too many romaji patterns for {key!r}")
            for spelling in spellings:
                if not 1 <= len(spelling) <= MAX_ROMAJI_LENGTH:
                    raise ValueError(f"Invalid romaji pattern for {key!r}: {spelling!r}")
            entries[_to_kana_unit(key)] = tuple(spellings)

        self._entries = MappingProxyType(entries)

    def candidates_for(self, unit: KanaUnit) -> tuple[str, ...]:
        """
        かなユニットに対応するローマ字パターンを取得する。

        かなペアで完全一致を試し、無ければ1文字目だけで検索する。

        Args:
            unit: 検索するかなユニット

        Returns:
            優先度順のローマ字パターン（見つからない場合は空タプル）

        Example:
            >>> registry = get_registry()
            >>> registry.candidates_for(KanaUnit(kana="き", next_kana="ゃ"))
            ('kya',)
            >>> registry.candidates_for(KanaUnit(kana="し"))
            ('si', 'ci', 'shi')
        """
        spellings = self._entries.get(unit)
        if spellings is None and unit.has_next:
            spellings = self._entries.get(unit.first())
        return spellings or ()

    def pair_candidates(self, unit: KanaUnit) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """
        1文字目のかなのパターンと、かなペアのパターンを別々に取得する。

        Returns:
            (1文字目のパターン, かなペアのパターン)。先読みが無い場合、かなペアは空。
        """
        single = self._entries.get(unit.first(), ())
        if not unit.has_next:
            return single, ()
        return single, self._entries.get(unit, ())

    def has(self, unit: KanaUnit) -> bool:
        """かなユニットにパターンが登録されているかを返す。"""
        return bool(self.candidates_for(unit))

    def __contains__(self, unit: object) -> bool:
        return isinstance(unit, KanaUnit) and self.has(unit)

    def __len__(self) -> int:
        return len(self._entries)


@cache
def get_registry() -> KanaRomajiRegistry:
    """組み込みテーブルのレジストリを返す（初回呼び出し時に1度だけ構築）。"""
    return KanaRomajiRegistry()
