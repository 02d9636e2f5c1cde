"""
Pinyin handling for hanzidict.

Provides the syllable inventory, tone stripping and tone extraction,
syllable splitting, and conversion of CC-CEDICT numbered pinyin to the
diacritic form.
"""

import re
import unicodedata
from typing import List, Optional, Tuple

from pypinyin.contrib.tone_convert import to_tone

from hanzidict.matcher import longest_match
from hanzidict.settings import PINYIN_WINDOW

# ============================================================================
# Syllable Inventory
# ============================================================================

# ü is written "v" throughout
SYLLABLES = frozenset("""
a ai an ang ao
ba bai ban bang bao bei ben beng bi bian biao bie bin bing bo bu
ca cai can cang cao ce cen ceng cha chai chan chang chao che chen cheng chi
chong chou chu chua chuai chuan chuang chui chun chuo ci cong cou cu cuan cui
cun cuo
da dai dan dang dao de dei den deng di dia dian diao die ding diu dong dou du
duan dui dun duo
e ei en eng er
fa fan fang fei fen feng fo fou fu
ga gai gan gang gao ge gei gen geng gong gou gu gua guai guan guang gui gun guo
ha hai han hang hao he hei hen heng hong hou hu hua huai huan huang hui hun huo
ji jia jian jiang jiao jie jin jing jiong jiu ju juan jue jun
ka kai kan kang kao ke kei ken keng kong kou ku kua kuai kuan kuang kui kun kuo
la lai lan lang lao le lei leng li lia lian liang liao lie lin ling liu lo long
lou lu luan lun luo lv lve
ma mai man mang mao me mei men meng mi mian miao mie min ming miu mo mou mu
na nai nan nang nao ne nei nen neng ni nian niang niao nie nin ning niu nong
nou nu nuan nuo nv nve
o ou
pa pai pan pang pao pei pen peng pi pian piao pie pin ping po pou pu
qi qia qian qiang qiao qie qin qing qiong qiu qu quan que qun
r ran rang rao re ren reng ri rong rou ru rua ruan rui run ruo
sa sai san sang sao se sen seng sha shai shan shang shao she shei shen sheng
shi shou shu shua shuai shuan shuang shui shun shuo si song sou su suan sui
sun suo
ta tai tan tang tao te teng ti tian tiao tie ting tong tou tu tuan tui tun tuo
wa wai wan wang wei wen weng wo wu
xi xia xian xiang xiao xie xin xing xiong xiu xu xuan xue xun
ya yan yang yao ye yi yin ying yo yong you yu yuan yue yun
za zai zan zang zao ze zei zen zeng zha zhai zhan zhang zhao zhe zhei zhen
zheng zhi zhong zhou zhu zhua zhuai zhuan zhuang zhui zhun zhuo zi zong zou zu
zuan zui zun zuo
""".split())

TONE_DIGITS = "12345"
NEUTRAL_TONE = 5

COMBINING_DIAERESIS = "\u0308"

# Tone mark combining characters (macron, acute, caron, grave)
TONE_MARKS = {"\u0304": 1, "\u0301": 2, "\u030c": 3, "\u0300": 4}

NUMBERED_SYLLABLE_RE = re.compile(r"^([a-zv]+)([1-5]?)$")


# ============================================================================
# Normalization
# ============================================================================

def normalize_cedict(syllable: str) -> str:
    """Rewrite the CC-CEDICT spelling ``u:`` as ``v``."""
    return syllable.replace("u:", "v").replace("U:", "V")


def strip_tones(text: str) -> str:
    """
    Remove tone diacritics from pinyin, writing ü as v.

    Examples:
        >>> strip_tones("nǐhǎo")
        'nihao'
        >>> strip_tones("lǜ")
        'lv'
    """
    decomposed = unicodedata.normalize("NFD", text)
    decomposed = decomposed.replace("u" + COMBINING_DIAERESIS, "v")
    decomposed = decomposed.replace("U" + COMBINING_DIAERESIS, "V")
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def has_tone_marks(text: str) -> bool:
    """True if the text carries any pinyin tone diacritic."""
    decomposed = unicodedata.normalize("NFD", text)
    return any(c in TONE_MARKS for c in decomposed)


def has_tone_numbers(text: str) -> bool:
    return any(c in TONE_DIGITS for c in text)


# ============================================================================
# Syllable Splitting
# ============================================================================

def _is_syllable(candidate: str) -> bool:
    if candidate[-1:] in TONE_DIGITS:
        candidate = candidate[:-1]
    return candidate in SYLLABLES


def split_syllables(text: str) -> Optional[List[str]]:
    """
    Split a run of pinyin without spaces into syllables.

    Tone marks are removed first; tone digits may follow any syllable.
    Splitting is greedy longest-first, so an input such as ``xian`` is one
    syllable, not ``xi an``.

    Returns:
        The syllables, or None if some part of the text is not pinyin.
    """
    plain = strip_tones(text).lower()
    if not plain:
        return None
    result = longest_match(plain, _is_syllable, PINYIN_WINDOW)
    if not result.complete:
        return None
    return result.tokens


def is_pinyin_token(text: str) -> bool:
    """True if a whitespace-free token is made only of pinyin syllables."""
    return split_syllables(text) is not None


# ============================================================================
# Tone Conversion
# ============================================================================

def tone_numbers(pinyin_numbers: str) -> Tuple[int, ...]:
    """
    Per-syllable tones of space separated numbered pinyin.

    Syllables without a trailing digit count as neutral (5).

        >>> tone_numbers("ni3 hao3")
        (3, 3)
    """
    tones = []
    for syllable in pinyin_numbers.split():
        last = syllable[-1:]
        tones.append(int(last) if last in TONE_DIGITS else NEUTRAL_TONE)
    return tuple(tones)


def syllable_to_marks(syllable: str) -> str:
    """
    Convert one numbered syllable (``hao3``, ``lv4``) to diacritics.

    Anything that is not a plain numbered syllable (punctuation, Latin
    letters in mixed entries) is returned unchanged apart from ``u:``.
    """
    syllable = normalize_cedict(syllable)
    match = NUMBERED_SYLLABLE_RE.match(syllable.lower())
    if not match:
        return syllable
    body, tone = match.groups()
    if not tone or tone == "5":
        marked = body
    else:
        marked = to_tone(body.replace("v", "ü") + tone)
    marked = marked.replace("v", "ü")
    if syllable[:1].isupper():
        marked = marked[:1].upper() + marked[1:]
    return marked


def numbers_to_marks(pinyin_numbers: str) -> str:
    """
    Convert space separated numbered pinyin to diacritic pinyin.

        >>> numbers_to_marks("ni3 hao3")
        'nǐ hǎo'
    """
    return " ".join(syllable_to_marks(s) for s in pinyin_numbers.split())


def remove_tone_numbers(syllable: str) -> str:
    if syllable[-1:] in TONE_DIGITS:
        return syllable[:-1]
    return syllable
