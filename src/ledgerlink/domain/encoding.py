"""Text encoding detection for uploaded bank statements.

Bank exports come in whatever 8-bit code page the bank's locale uses. Every
candidate codec is tried and the decoded text is scored for how much it looks
like a readable CSV statement; the best candidate wins.
"""

import codecs
import locale
import re

import structlog

logger = structlog.get_logger(__name__)

CANDIDATE_ENCODINGS = (
    "utf-8-sig",  # strict UTF-8, drops a leading BOM
    "iso-8859-2",  # Latin-2, Central/Eastern Europe
    "cp1252",  # Western Europe
    "iso-8859-1",
    "cp1250",  # Central Europe
    "cp1251",  # Cyrillic
    "latin-1",
)

PERFECT_SCORE = 100

COMMON_HEADERS = ("date", "montant", "libellé", "solde", "description", "amount", "date de valeur")
BANKING_TERMS = ("virement", "paiement", "carte", "compte", "banque", "crédit", "débit")

_NON_PRINTABLE = re.compile(r"[\x00-\x08\x0e-\x1f\x7f-\x9f]")
_ACCENTED = re.compile(r"[éèêëàâäôöùûüç]", re.IGNORECASE)


def _encoding_exists(encoding: str) -> bool:
    try:
        codecs.lookup(encoding)
    except LookupError:
        return False
    return True


def score_text_quality(text: str) -> int:
    """Score decoded text from 0 to 100, where 100 is a clean CSV statement."""
    if not text:
        return 0

    score = 100
    total_chars = len(text)
    lowered = text.lower()

    score -= text.count("\ufffd") * 20

    if "," not in text and ";" not in text:
        score -= 50

    if len(_NON_PRINTABLE.findall(text)) / total_chars > 0.1:
        score -= 30

    if any(header in lowered for header in COMMON_HEADERS):
        score += 15

    if _ACCENTED.search(text):
        score += 10

    if any(term in lowered for term in BANKING_TERMS):
        score += 5

    # Question marks are what lossy re-encodings leave behind
    if text.count("?") > total_chars * 0.05:
        score -= 20

    return max(0, min(PERFECT_SCORE, score))


def decode_statement_bytes(raw: bytes) -> str:
    """Decode raw statement bytes using the best-scoring candidate encoding.

    Never raises for decodable input: falls back to lenient UTF-8 and then to
    the platform default encoding. Only a failure of that last fallback
    propagates.
    """
    best_result = ""
    best_score = -1
    best_encoding = None

    for encoding in CANDIDATE_ENCODINGS:
        if not _encoding_exists(encoding):
            continue
        try:
            decoded = raw.decode(encoding)
        except UnicodeDecodeError:
            continue

        score = score_text_quality(decoded)
        if score > best_score:
            best_score = score
            best_result = decoded
            best_encoding = encoding

        if score >= PERFECT_SCORE:
            logger.debug("encoding_detected", encoding=encoding, score=score)
            return decoded

    if best_result:
        logger.debug("encoding_detected", encoding=best_encoding, score=best_score)
        return best_result

    try:
        return raw.decode("utf-8", errors="replace")
    except (UnicodeError, LookupError) as e:
        logger.warning("encoding_fallback", error=str(e))
        return raw.decode(locale.getpreferredencoding(False))
