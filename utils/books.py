# utils/books.py
import re
import unicodedata
from functools import lru_cache

import pythonbible

# Canonical book order: (USFM id, English name). book_num is the 1-based position.
BOOKS = [
    ('GEN', 'Genesis'), ('EXO', 'Exodus'), ('LEV', 'Leviticus'),
    ('NUM', 'Numbers'), ('DEU', 'Deuteronomy'), ('JOS', 'Joshua'),
    ('JDG', 'Judges'), ('RUT', 'Ruth'), ('1SA', '1 Samuel'),
    ('2SA', '2 Samuel'), ('1KI', '1 Kings'), ('2KI', '2 Kings'),
    ('1CH', '1 Chronicles'), ('2CH', '2 Chronicles'), ('EZR', 'Ezra'),
    ('NEH', 'Nehemiah'), ('EST', 'Esther'), ('JOB', 'Job'),
    ('PSA', 'Psalms'), ('PRO', 'Proverbs'), ('ECC', 'Ecclesiastes'),
    ('SNG', 'Song of Solomon'), ('ISA', 'Isaiah'), ('JER', 'Jeremiah'),
    ('LAM', 'Lamentations'), ('EZK', 'Ezekiel'), ('DAN', 'Daniel'),
    ('HOS', 'Hosea'), ('JOL', 'Joel'), ('AMO', 'Amos'),
    ('OBA', 'Obadiah'), ('JON', 'Jonah'), ('MIC', 'Micah'),
    ('NAM', 'Nahum'), ('HAB', 'Habakkuk'), ('ZEP', 'Zephaniah'),
    ('HAG', 'Haggai'), ('ZEC', 'Zechariah'), ('MAL', 'Malachi'),
    ('MAT', 'Matthew'), ('MRK', 'Mark'), ('LUK', 'Luke'),
    ('JHN', 'John'), ('ACT', 'Acts'), ('ROM', 'Romans'),
    ('1CO', '1 Corinthians'), ('2CO', '2 Corinthians'), ('GAL', 'Galatians'),
    ('EPH', 'Ephesians'), ('PHP', 'Philippians'), ('COL', 'Colossians'),
    ('1TH', '1 Thessalonians'), ('2TH', '2 Thessalonians'), ('1TI', '1 Timothy'),
    ('2TI', '2 Timothy'), ('TIT', 'Titus'), ('PHM', 'Philemon'),
    ('HEB', 'Hebrews'), ('JAS', 'James'), ('1PE', '1 Peter'),
    ('2PE', '2 Peter'), ('1JN', '1 John'), ('2JN', '2 John'),
    ('3JN', '3 John'), ('JUD', 'Jude'), ('REV', 'Revelation'),
]

BOOK_IDS = [book_id for book_id, _ in BOOKS]

# Books with one chapter, where "Jude 3" means verse 3
SINGLE_CHAPTER_BOOKS = {'OBA', 'PHM', '2JN', '3JN', 'JUD'}

# Alternate English names seen in source files and common abbreviations
BOOK_ALIASES = {
    'GEN': ['Gen', 'Gn'], 'EXO': ['Exod', 'Exo', 'Ex'], 'LEV': ['Lev', 'Lv'],
    'NUM': ['Num', 'Nm'], 'DEU': ['Deut', 'Dt'], 'JOS': ['Josh'],
    'JDG': ['Judg', 'Jdg'], 'RUT': ['Rth'], '1SA': ['1 Sam'], '2SA': ['2 Sam'],
    '1KI': ['1 Kgs'], '2KI': ['2 Kgs'], '1CH': ['1 Chron', '1 Chr'],
    '2CH': ['2 Chron', '2 Chr'], 'EZR': ['Ezr'], 'NEH': ['Neh'],
    'EST': ['Esth'], 'PSA': ['Psalm', 'Psa', 'Ps'], 'PRO': ['Prov', 'Prv'],
    'ECC': ['Eccles', 'Eccl', 'Ecc', 'Qoheleth'],
    'SNG': ["Solomon's Song", 'Song of Songs', 'Canticles', 'Song'],
    'ISA': ['Isa'], 'JER': ['Jer'], 'LAM': ['Lam'], 'EZK': ['Ezek', 'Ezk'],
    'DAN': ['Dan', 'Dn'], 'HOS': ['Hos'], 'JOL': ['Jl'], 'AMO': ['Am'],
    'OBA': ['Obad', 'Ob'], 'JON': ['Jnh'], 'MIC': ['Mic'], 'NAM': ['Nah'],
    'HAB': ['Hab'], 'ZEP': ['Zeph', 'Zep'], 'HAG': ['Hag'],
    'ZEC': ['Zech', 'Zec'], 'MAL': ['Mal'], 'MAT': ['Matt', 'Mt'],
    'MRK': ['Mrk', 'Mk'], 'LUK': ['Luk', 'Lk'], 'JHN': ['Jhn', 'Jn'],
    'ACT': ['Acts of the Apostles'], 'ROM': ['Rom', 'Rm'],
    '1CO': ['1 Cor'], '2CO': ['2 Cor'], 'GAL': ['Gal'], 'EPH': ['Eph'],
    'PHP': ['Phil', 'Php'], 'COL': ['Col'], '1TH': ['1 Thess', '1 Thes'],
    '2TH': ['2 Thess', '2 Thes'], '1TI': ['1 Tim'], '2TI': ['2 Tim'],
    'TIT': ['Tit'], 'PHM': ['Philem', 'Phlm', 'Phm'], 'HEB': ['Heb'],
    'JAS': ['Jas', 'Jm'], '1PE': ['1 Pet', '1 Pt'], '2PE': ['2 Pet', '2 Pt'],
    '1JN': ['1 Jn', '1 Jhn'], '2JN': ['2 Jn', '2 Jhn'], '3JN': ['3 Jn', '3 Jhn'],
    'JUD': ['Jud'], 'REV': ['Revelation of John', 'Revelations', 'Rev', 'Apocalypse'],
}

# Book names by three-letter language code, in canonical order
LOCALIZED_BOOKS = {
    'spa': [
        'Génesis', 'Éxodo', 'Levítico', 'Números', 'Deuteronomio', 'Josué',
        'Jueces', 'Rut', '1 Samuel', '2 Samuel', '1 Reyes', '2 Reyes',
        '1 Crónicas', '2 Crónicas', 'Esdras', 'Nehemías', 'Ester', 'Job',
        'Salmos', 'Proverbios', 'Eclesiastés', 'Cantares', 'Isaías', 'Jeremías',
        'Lamentaciones', 'Ezequiel', 'Daniel', 'Oseas', 'Joel', 'Amós',
        'Abdías', 'Jonás', 'Miqueas', 'Nahúm', 'Habacuc', 'Sofonías',
        'Hageo', 'Zacarías', 'Malaquías', 'Mateo', 'Marcos', 'Lucas',
        'Juan', 'Hechos', 'Romanos', '1 Corintios', '2 Corintios', 'Gálatas',
        'Efesios', 'Filipenses', 'Colosenses', '1 Tesalonicenses', '2 Tesalonicenses', '1 Timoteo',
        '2 Timoteo', 'Tito', 'Filemón', 'Hebreos', 'Santiago', '1 Pedro',
        '2 Pedro', '1 Juan', '2 Juan', '3 Juan', 'Judas', 'Apocalipsis',
    ],
    'por': [
        'Gênesis', 'Êxodo', 'Levítico', 'Números', 'Deuteronômio', 'Josué',
        'Juízes', 'Rute', '1 Samuel', '2 Samuel', '1 Reis', '2 Reis',
        '1 Crônicas', '2 Crônicas', 'Esdras', 'Neemias', 'Ester', 'Jó',
        'Salmos', 'Provérbios', 'Eclesiastes', 'Cânticos', 'Isaías', 'Jeremias',
        'Lamentações', 'Ezequiel', 'Daniel', 'Oséias', 'Joel', 'Amós',
        'Obadias', 'Jonas', 'Miquéias', 'Naum', 'Habacuque', 'Sofonias',
        'Ageu', 'Zacarias', 'Malaquias', 'Mateus', 'Marcos', 'Lucas',
        'João', 'Atos', 'Romanos', '1 Coríntios', '2 Coríntios', 'Gálatas',
        'Efésios', 'Filipenses', 'Colossenses', '1 Tessalonicenses', '2 Tessalonicenses', '1 Timóteo',
        '2 Timóteo', 'Tito', 'Filemom', 'Hebreus', 'Tiago', '1 Pedro',
        '2 Pedro', '1 João', '2 João', '3 João', 'Judas', 'Apocalipse',
    ],
}

LOCALIZED_ALIASES = {
    'spa': {
        'SNG': ['Cantar de los Cantares'], 'ACT': ['Hechos de los Apóstoles'],
        'JAS': ['Santiago', 'Sant'], 'REV': ['Revelación'],
        'GEN': ['Gén'], 'EXO': ['Éx'], 'MAT': ['Mt'], 'JHN': ['Jn'],
    },
    'por': {
        'SNG': ['Cântico dos Cânticos', 'Cantares'], 'ACT': ['Atos dos Apóstolos'],
        'REV': ['Revelação'], 'GEN': ['Gên'], 'MAT': ['Mt'],
    },
}

# Two-letter codes and language names seen in translation metadata
LANGUAGE_CODES = {
    'en': 'eng', 'english': 'eng',
    'es': 'spa', 'spanish': 'spa', 'español': 'spa',
    'pt': 'por', 'portuguese': 'por', 'português': 'por',
}

ENGLISH = 'eng'
ORDINALS = {'1': ['I', 'First'], '2': ['II', 'Second'], '3': ['III', 'Third']}


def book_num_for(book_id):
    """1-based canonical position of a USFM book id, or None if not canonical."""
    try:
        return BOOK_IDS.index(book_id) + 1
    except ValueError:
        return None


def language_key(language_code):
    """Three-letter code whose name table applies, or None when there is none."""
    if not language_code:
        return ENGLISH
    code = language_code.strip().lower()
    code = LANGUAGE_CODES.get(code, code)
    if code == ENGLISH or code in LOCALIZED_BOOKS:
        return code
    return None


def normalize_name(name):
    """Lookup key for a book name: accents and periods dropped, case folded."""
    decomposed = unicodedata.normalize('NFKD', name)
    key = ''.join(c for c in decomposed if not unicodedata.combining(c))
    key = key.replace('.', ' ').casefold()
    return re.sub(r'\s+', ' ', key).strip()


def _with_ordinals(name, english):
    """"1 John" also written "1John", "I John" and, in English, "First John"."""
    variants = [name]
    number, _, rest = name.partition(' ')
    if number in ORDINALS and rest:
        roman, word = ORDINALS[number]
        variants.extend([number + rest, f"{roman} {rest}"])
        if english:
            variants.append(f"{word} {rest}")
    return variants


def _english_names():
    names = {}
    for book_id, name in BOOKS:
        names[book_id] = [name]
    for book in pythonbible.Book:
        if 1 <= book.value <= len(BOOK_IDS):
            names[BOOK_IDS[book.value - 1]].append(book.title)
    for book_id, aliases in BOOK_ALIASES.items():
        names[book_id].extend(aliases)
    return names


@lru_cache(maxsize=None)
def book_names(language_code=None):
    """Lookup key -> USFM id for a language.

    English names are always included; a localized name wins where both
    languages spell a book the same way.
    """
    table = {}
    for book_id, names in _english_names().items():
        for name in names:
            for variant in _with_ordinals(name, english=True):
                table[normalize_name(variant)] = book_id

    language = language_key(language_code)
    if language in LOCALIZED_BOOKS:
        localized = LOCALIZED_ALIASES.get(language, {})
        for book_id, name in zip(BOOK_IDS, LOCALIZED_BOOKS[language]):
            for alias in [name] + localized.get(book_id, []):
                for variant in _with_ordinals(alias, english=False):
                    table[normalize_name(variant)] = book_id
    return table


def book_id_for_name(name, language_code=None):
    """USFM id for a book name in the given language, or None if unknown."""
    return book_names(language_code).get(normalize_name(name))


def display_name(book_id, language_code=None):
    """Book name used when rendering a reference back to text."""
    position = book_num_for(book_id)
    language = language_key(language_code)
    if language in LOCALIZED_BOOKS:
        return LOCALIZED_BOOKS[language][position - 1]
    return BOOKS[position - 1][1]
