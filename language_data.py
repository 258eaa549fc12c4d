"""
language_data.py — Reference letter/n-gram statistics for the built-in languages.

Values are approximate corpus frequencies. Letter tables are percentages
(summing to ~100); bigram and trigram tables are relative frequencies on a
0-1 scale and only list the most common n-grams (anything absent scores 0).
Common words are upper-case and at least three letters long, since shorter
tokens are ignored by the word-hit score.
"""

from __future__ import annotations


# ============================================================================
# ENGLISH
# ============================================================================

ENGLISH_LETTERS: dict[str, float] = {
    "A": 8.12, "B": 1.49, "C": 2.78, "D": 4.25, "E": 12.02,
    "F": 2.23, "G": 2.02, "H": 6.09, "I": 6.97, "J": 0.15,
    "K": 0.77, "L": 4.03, "M": 2.41, "N": 6.75, "O": 7.51,
    "P": 1.93, "Q": 0.10, "R": 5.99, "S": 6.33, "T": 9.06,
    "U": 2.76, "V": 0.98, "W": 2.36, "X": 0.15, "Y": 1.97,
    "Z": 0.07,
}

ENGLISH_BIGRAMS: dict[str, float] = {
    "TH": 0.0271, "HE": 0.0233, "IN": 0.0203, "ER": 0.0178, "AN": 0.0161,
    "RE": 0.0141, "ED": 0.0117, "ND": 0.0107, "ON": 0.0106, "EN": 0.0105,
    "AT": 0.0103, "OU": 0.0102, "IT": 0.0100, "IS": 0.0098, "OR": 0.0091,
    "TI": 0.0089, "AS": 0.0087, "TE": 0.0087, "ET": 0.0076, "NG": 0.0076,
    "OF": 0.0075, "AL": 0.0074, "DE": 0.0070, "SE": 0.0068, "LE": 0.0066,
    "SA": 0.0063, "SI": 0.0062, "AR": 0.0062, "VE": 0.0058, "RA": 0.0057,
    "LD": 0.0057, "UR": 0.0056, "TA": 0.0056, "RI": 0.0055, "NE": 0.0055,
}

ENGLISH_TRIGRAMS: dict[str, float] = {
    "THE": 0.0181, "AND": 0.0073, "ING": 0.0072, "HER": 0.0036, "HAT": 0.0031,
    "HIS": 0.0031, "THA": 0.0031, "ERE": 0.0031, "FOR": 0.0028, "ENT": 0.0028,
    "ION": 0.0027, "TER": 0.0024, "HAS": 0.0024, "YOU": 0.0024, "ITH": 0.0023,
    "VER": 0.0022, "ALL": 0.0022, "WIT": 0.0021, "THI": 0.0021, "TIO": 0.0021,
    "EST": 0.0020, "ARE": 0.0019, "HEN": 0.0019, "RST": 0.0019, "OUR": 0.0018,
    "OUT": 0.0018, "HAV": 0.0018, "ATE": 0.0017, "STH": 0.0017, "VED": 0.0017,
}

ENGLISH_WORDS: tuple[str, ...] = (
    "THE", "AND", "FOR", "ARE", "BUT", "NOT", "YOU", "ALL", "CAN", "HER",
    "WAS", "ONE", "OUR", "OUT", "DAY", "GET", "HAS", "HIM", "HIS", "HOW",
    "ITS", "MAY", "NEW", "NOW", "OLD", "SEE", "TWO", "WHO", "BOY", "DID",
    "MAN", "OWN", "SAY", "SHE", "TOO", "USE", "THAT", "WITH", "FROM", "THIS",
    "HAVE", "WILL", "WHAT", "WHEN", "WHERE", "WHICH", "THERE", "WOULD", "ABOUT",
    "AFTER", "FIRST", "NEVER", "THESE", "THINK", "BEING", "EVERY",
    "GREAT", "MIGHT", "SHALL", "STILL", "THOSE", "UNDER", "WHILE", "COULD",
    "THEY", "THEM", "THEIR", "THAN", "THEN", "BEEN", "WERE", "INTO", "SOME",
    "ONLY", "OVER", "ALSO", "MORE", "MOST", "SUCH", "YOUR", "EACH", "MANY",
    "MUCH", "VERY", "JUST", "LIKE", "TIME", "WELL", "WORK", "BECAUSE", "OTHER",
)

ENGLISH_IC: float = 0.0667


# ============================================================================
# TURKISH (ASCII-folded: dotless i counts as I, other diacritic letters drop out)
# ============================================================================

TURKISH_LETTERS: dict[str, float] = {
    "A": 11.92, "B": 2.65, "C": 0.96, "D": 4.87, "E": 8.91,
    "F": 0.41, "G": 1.24, "H": 1.16, "I": 8.60, "J": 0.00,
    "K": 4.68, "L": 5.92, "M": 3.75, "N": 7.23, "O": 2.72,
    "P": 0.84, "Q": 0.00, "R": 6.92, "S": 3.01, "T": 5.71,
    "U": 3.39, "V": 0.95, "W": 0.00, "X": 0.00, "Y": 3.34,
    "Z": 1.52,
}

TURKISH_BIGRAMS: dict[str, float] = {
    "AR": 0.0210, "LA": 0.0198, "LE": 0.0178, "ER": 0.0176, "IN": 0.0170,
    "AN": 0.0168, "EN": 0.0155, "DE": 0.0140, "DA": 0.0132, "IR": 0.0130,
    "BI": 0.0118, "RI": 0.0115, "AK": 0.0112, "KA": 0.0104, "NI": 0.0100,
    "IL": 0.0096, "AL": 0.0093, "ND": 0.0090, "MA": 0.0088, "RA": 0.0086,
    "IY": 0.0080, "YA": 0.0079, "EL": 0.0077, "ME": 0.0076, "NA": 0.0074,
    "LI": 0.0073, "SI": 0.0071, "KE": 0.0069, "NE": 0.0068, "RE": 0.0066,
    "EK": 0.0064, "AY": 0.0062, "TA": 0.0060, "BA": 0.0058, "AS": 0.0056,
}

TURKISH_TRIGRAMS: dict[str, float] = {
    "LAR": 0.0095, "LER": 0.0088, "BIR": 0.0072, "ARA": 0.0050, "INI": 0.0048,
    "AND": 0.0046, "ERI": 0.0045, "IND": 0.0044, "ARI": 0.0043, "DAN": 0.0040,
    "YOR": 0.0039, "ASI": 0.0037, "ILE": 0.0036, "END": 0.0035, "ANI": 0.0034,
    "RIN": 0.0033, "KAR": 0.0032, "DEN": 0.0031, "ESI": 0.0030, "MAK": 0.0029,
    "OLA": 0.0028, "LAN": 0.0027, "IRI": 0.0026, "ADA": 0.0025, "NDE": 0.0024,
}

TURKISH_WORDS: tuple[str, ...] = (
    "BIR", "ILE", "HER", "BEN", "SEN", "BIZ", "SIZ", "AMA", "VAR", "YOK",
    "DAHA", "GIBI", "OLAN", "OLARAK", "KADAR", "SONRA", "ONLAR", "ANCAK",
    "YANI", "NEDEN", "BANA", "SANA", "ONUN", "BENIM", "SENIN", "BIRAZ",
    "ZAMAN", "ARTIK", "HEMEN", "YENI", "BUNU", "BUNA", "ONDAN", "BURADA",
    "ORADA", "SADECE", "TAMAM", "EVET", "HAYIR", "BAZI", "HALA", "KENDI",
)

TURKISH_IC: float = 0.0590


# Registry input consumed by freqbreak at import time.
BUILTIN_LANGUAGES: dict[str, dict] = {
    "english": {
        "letter_freq": ENGLISH_LETTERS,
        "bigrams": ENGLISH_BIGRAMS,
        "trigrams": ENGLISH_TRIGRAMS,
        "common_words": ENGLISH_WORDS,
        "reference_ic": ENGLISH_IC,
    },
    "turkish": {
        "letter_freq": TURKISH_LETTERS,
        "bigrams": TURKISH_BIGRAMS,
        "trigrams": TURKISH_TRIGRAMS,
        "common_words": TURKISH_WORDS,
        "reference_ic": TURKISH_IC,
    },
}

# Index of coincidence of uniformly random letters (1/26).
RANDOM_IC: float = 0.0385
