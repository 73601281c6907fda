"""Built-in kanji collections for word building."""

from .models import Pool, Unit

# Kanji by category: {kanji: (meanings, on'yomi, kun'yomi)}
# The first meaning is the tile label; readings are hints.
KANJI_COLLECTIONS = {
    'nature': {
        'name': 'Nature',
        'items': {
            '山': ('mountain', 'サン', 'やま'),
            '川': ('river', 'セン', 'かわ'),
            '日': ('sun,day', 'ニチ,ジツ', 'ひ,か'),
            '月': ('moon,month', 'ゲツ,ガツ', 'つき'),
            '火': ('fire', 'カ', 'ひ'),
            '水': ('water', 'スイ', 'みず'),
            '木': ('tree,wood', 'モク,ボク', 'き'),
            '土': ('earth,soil', 'ド,ト', 'つち'),
            '金': ('gold,money', 'キン,コン', 'かね'),
            '空': ('sky,empty', 'クウ', 'そら'),
            '雨': ('rain', 'ウ', 'あめ'),
            '花': ('flower', 'カ', 'はな'),
            '石': ('stone', 'セキ', 'いし'),
            '林': ('grove', 'リン', 'はやし'),
            '森': ('forest', 'シン', 'もり')
        }
    },
    'number': {
        'name': 'Number',
        'items': {
            '一': ('one', 'イチ', 'ひと'),
            '二': ('two', 'ニ', 'ふた'),
            '三': ('three', 'サン', 'み'),
            '四': ('four', 'シ', 'よ,よん'),
            '五': ('five', 'ゴ', 'いつ'),
            '六': ('six', 'ロク', 'む'),
            '七': ('seven', 'シチ', 'なな'),
            '八': ('eight', 'ハチ', 'や'),
            '九': ('nine', 'キュウ,ク', 'ここの'),
            '十': ('ten', 'ジュウ', 'とお'),
            '百': ('hundred', 'ヒャク', ''),
            '千': ('thousand', 'セン', 'ち'),
            '万': ('ten thousand', 'マン,バン', '')
        }
    },
    'people': {
        'name': 'People',
        'items': {
            '人': ('person', 'ジン,ニン', 'ひと'),
            '男': ('man,male', 'ダン,ナン', 'おとこ'),
            '女': ('woman,female', 'ジョ,ニョ', 'おんな'),
            '子': ('child', 'シ,ス', 'こ'),
            '父': ('father', 'フ', 'ちち'),
            '母': ('mother', 'ボ', 'はは'),
            '友': ('friend', 'ユウ', 'とも'),
            '先': ('ahead,previous', 'セン', 'さき'),
            '生': ('life,birth', 'セイ,ショウ', 'い,う,なま'),
            '学': ('study,learning', 'ガク', 'まな')
        }
    },
    'body': {
        'name': 'Body',
        'items': {
            '目': ('eye', 'モク', 'め'),
            '口': ('mouth', 'コウ,ク', 'くち'),
            '耳': ('ear', 'ジ', 'みみ'),
            '手': ('hand', 'シュ', 'て'),
            '足': ('foot,leg', 'ソク', 'あし'),
            '心': ('heart,mind', 'シン', 'こころ'),
            '力': ('power,strength', 'リョク,リキ', 'ちから'),
            '体': ('body', 'タイ,テイ', 'からだ')
        }
    },
    'direction': {
        'name': 'Direction',
        'items': {
            '上': ('above,up', 'ジョウ', 'うえ'),
            '下': ('below,down', 'カ,ゲ', 'した'),
            '左': ('left', 'サ', 'ひだり'),
            '右': ('right', 'ウ,ユウ', 'みぎ'),
            '中': ('middle,inside', 'チュウ', 'なか'),
            '外': ('outside', 'ガイ,ゲ', 'そと'),
            '東': ('east', 'トウ', 'ひがし'),
            '西': ('west', 'セイ,サイ', 'にし'),
            '南': ('south', 'ナン', 'みなみ'),
            '北': ('north', 'ホク', 'きた')
        }
    }
}

CATEGORY_DISPLAY_NAMES = {cat: data['name'] for cat, data in KANJI_COLLECTIONS.items()}


def _readings(text: str) -> list[str]:
    return [r.strip() for r in text.split(',') if r.strip()]


def get_all_categories() -> list[str]:
    """Get list of all collection keys."""
    return list(KANJI_COLLECTIONS.keys())


def get_category_name(category: str) -> str:
    """Get display name for a collection."""
    return CATEGORY_DISPLAY_NAMES.get(category, category)


def get_collection_units(category: str) -> list[Unit]:
    """Get the units of a collection in definition order, or [] if unknown."""
    items = KANJI_COLLECTIONS.get(category, {}).get('items', {})
    units = []
    for kanji, (meanings, onyomi, kunyomi) in items.items():
        hints = _readings(onyomi) + _readings(kunyomi)
        units.append(Unit.from_meanings(kanji, meanings, hints=hints))
    return units


def get_collection_pool(category: str) -> Pool | None:
    """Build a pool for a collection. Returns None for unknown collections."""
    if category not in KANJI_COLLECTIONS:
        return None
    return Pool(get_collection_units(category), name=category)
