"""
Keyword sentiment over news headlines.

Every headline is lower-cased and checked for each word of two fixed lists;
a word present anywhere in the headline (substring, not token) adds +1 or -1.
"growth concern" nets 0 and "upgrade" counts as "up". The aggregate score is
the mean over headlines, 0 when there are none.
"""
from typing import Iterable, Optional, Union
from common.logger import get_logger
from common.models import Headline, NewsArticle, SentimentSignal

logger = get_logger("sentiment")

POSITIVE_WORDS = ("growth", "profit", "increase", "rise", "gain",
                  "strong", "beat", "exceed", "positive", "up")
NEGATIVE_WORDS = ("loss", "decline", "fall", "drop", "weak",
                  "miss", "negative", "down", "concern", "risk")

MAX_HEADLINES = 5


def score_headline(title: str) -> int:
    text = title.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in text)
    negative = sum(1 for word in NEGATIVE_WORDS if word in text)
    return positive - negative


def sentiment_label(score: float) -> str:
    if score > 0.5:   return "Very Positive sentiment in recent news"
    if score > 0:     return "Positive sentiment in recent news"
    if score == 0:    return "Neutral sentiment in recent news"
    if score > -0.5:  return "Negative sentiment in recent news"
    return "Very Negative sentiment in recent news"


def derive_sentiment(items: Iterable[Union[str, NewsArticle]]) -> SentimentSignal:
    """Score headlines (plain strings or articles) into a SentimentSignal."""
    headlines: list[Headline] = []
    for item in items:
        title: str
        url: Optional[str] = None
        if isinstance(item, NewsArticle):
            title, url = item.title, item.url
        else:
            title = item
        if not title:
            continue
        headlines.append(Headline(title=title, sentiment=score_headline(title), url=url))

    mean = sum(h.sentiment for h in headlines) / len(headlines) if headlines else 0.0
    logger.info(f"Sentiment over {len(headlines)} headlines: {mean:.2f}")
    return SentimentSignal(
        score=round(mean, 2),
        message=sentiment_label(mean),
        headlines=headlines[:MAX_HEADLINES],
    )
