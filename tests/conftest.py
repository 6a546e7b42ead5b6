from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from biasdesk.models import Article, Bias

BASE_TIME = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)

_ids = count(1)


def make_article(title, bias=Bias.PROGRESSIVE, minutes=0, **kwargs):
    """Article published `minutes` after BASE_TIME (negative for earlier)."""
    n = next(_ids)
    defaults = {
        "title": title,
        "link": f"https://{bias.value}.example.com/{n}",
        "published_at": BASE_TIME + timedelta(minutes=minutes),
        "source_name": f"{bias.value.title()} Daily",
        "source_bias": bias,
    }
    defaults.update(kwargs)
    return Article(**defaults)


@pytest.fixture
def article_factory():
    return make_article
