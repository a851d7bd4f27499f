"""
Link Extractor

Picks an information link out of joined search-result text.
"""

import re
from typing import Optional

from src.treatment_finder.lexicon import MEDICAL_LINK_DOMAINS

URL_PATTERN = re.compile(r'https?://[^\s\])"\'>]+')
TRAILING_PUNCTUATION = re.compile(r'[,."\')\]]+$')


def extract_medical_link(text: Optional[str]) -> str:
    """
    Return the first medical-domain URL in the text, else the first URL.

    Trailing punctuation is stripped. Returns "" when the text has no URL.
    """
    if not text:
        return ""

    urls = URL_PATTERN.findall(text)
    if not urls:
        return ""

    for url in urls:
        if any(domain in url for domain in MEDICAL_LINK_DOMAINS):
            return TRAILING_PUNCTUATION.sub("", url)

    return TRAILING_PUNCTUATION.sub("", urls[0])
