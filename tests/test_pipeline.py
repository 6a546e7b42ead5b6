"""Tests for the matching pipeline."""

import pytest

from biasdesk.config import ConfigModel, SourceConfig
from biasdesk.errors import FeedsUnavailableError
from biasdesk.ingestion import FeedResult, RSSFetcher, SourceRegistry
from biasdesk.matching import CategoryProvider, StaticCategoryProvider
from biasdesk.models import Bias
from biasdesk.pipeline import MatchPipeline, PipelineStage
from biasdesk.snapshot import MemorySnapshotStore, SnapshotCache

from .conftest import make_article

P, C, R = Bias.PROGRESSIVE, Bias.CENTRIST, Bias.CONSERVATIVE


class FakeFetcher(RSSFetcher):
    """Serves canned articles per feed URL; URLs mapped to None fail."""

    def __init__(self, feeds):
        super().__init__()
        self.feeds = feeds
        self.calls = []

    async def fetch_feed(self, source):
        self.calls.append(source.feed_url)
        articles = self.feeds.get(source.feed_url)
        if articles is None:
            return FeedResult(source_name=source.name, feed_url=source.feed_url, success=False, error="down")
        return FeedResult(source_name=source.name, feed_url=source.feed_url, success=True, articles=articles)


class BrokenProvider(CategoryProvider):
    def list_special_category_names(self):
        raise RuntimeError("store unavailable")


def registry(*entries):
    return SourceRegistry(
        SourceConfig(id=f"{bias.value}-{i}", name=f"{bias.value} {i}", feed_url=url, bias=bias)
        for i, (bias, url) in enumerate(entries)
    )


def three_source_registry():
    return registry((P, "https://p.example.com/rss"), (C, "https://c.example.com/rss"), (R, "https://r.example.com/rss"))


def budget_feeds():
    return {
        "https://p.example.com/rss": [make_article("Congreso aprueba los presupuestos 2026", P, minutes=0)],
        "https://c.example.com/rss": [make_article("El Congreso aprueba los presupuestos generales", C, minutes=5)],
        "https://r.example.com/rss": [make_article("Aprobados los presupuestos en el Congreso", R, minutes=-5)],
    }


def make_pipeline(feeds, settings=None, categories=None, sources=None):
    return MatchPipeline(
        sources if sources is not None else three_source_registry(),
        FakeFetcher(feeds),
        settings=settings,
        categories=categories,
    )


class TestComputeMatchedStories:
    @pytest.mark.asyncio
    async def test_end_to_end_single_group(self):
        result = await make_pipeline(budget_feeds()).compute_matched_stories(1)

        assert len(result.groups) == 1
        group = result.groups[0]
        assert group.progressive.title == "Congreso aprueba los presupuestos 2026"
        assert group.centrist.title == "El Congreso aprueba los presupuestos generales"
        assert group.conservative.title == "Aprobados los presupuestos en el Congreso"
        assert group.other_sources == []

    @pytest.mark.asyncio
    async def test_payload_shape(self):
        result = await make_pipeline(budget_feeds()).compute_matched_stories(1)

        payload = result.to_payload()

        assert list(payload) == ["groups"]
        group = payload["groups"][0]
        assert group["progressive"]["source_bias"] == "progressive"
        assert group["centrist"]["link"].startswith("https://centrist.example.com/")
        assert group["other_sources"] == []

    @pytest.mark.asyncio
    async def test_failed_category_starves_matching(self):
        feeds = budget_feeds()
        feeds["https://c.example.com/rss"] = None

        result = await make_pipeline(feeds).compute_matched_stories()

        assert result.groups == []
        assert result.stats["fetch"]["centrist"]["failed"] == 1

    @pytest.mark.asyncio
    async def test_total_outage_raises(self):
        feeds = {url: None for url in budget_feeds()}
        pipeline = make_pipeline(feeds)

        with pytest.raises(FeedsUnavailableError):
            await pipeline.compute_matched_stories()

    @pytest.mark.asyncio
    async def test_no_sources_configured_is_not_an_outage(self):
        result = await make_pipeline({}, sources=registry()).compute_matched_stories()

        assert result.groups == []

    @pytest.mark.asyncio
    async def test_category_without_sources_starves_matching(self):
        sources = registry((P, "https://p.example.com/rss"), (R, "https://r.example.com/rss"))

        result = await make_pipeline(budget_feeds(), sources=sources).compute_matched_stories()

        assert result.groups == []

    @pytest.mark.asyncio
    async def test_partial_source_failure_is_tolerated(self):
        feeds = budget_feeds()
        feeds["https://c2.example.com/rss"] = None
        sources = registry(
            (P, "https://p.example.com/rss"),
            (C, "https://c.example.com/rss"),
            (C, "https://c2.example.com/rss"),
            (R, "https://r.example.com/rss"),
        )

        result = await make_pipeline(feeds, sources=sources).compute_matched_stories()

        assert len(result.groups) == 1

    @pytest.mark.asyncio
    async def test_malformed_articles_are_skipped(self):
        feeds = budget_feeds()
        feeds["https://p.example.com/rss"].insert(0, make_article("", P, minutes=30))

        result = await make_pipeline(feeds).compute_matched_stories()

        assert len(result.groups) == 1
        assert result.stats["prepare"]["malformed"] == 1

    @pytest.mark.asyncio
    async def test_political_filter_applied_before_matching(self):
        # Six political centrist stories keep the filter active, so the sports
        # headline never becomes a centrist candidate.
        feeds = {
            "https://p.example.com/rss": [make_article("Real Madrid gana la final de Copa", P)],
            "https://c.example.com/rss": [make_article("Real Madrid gana la final de Copa", C, minutes=60)]
            + [make_article(f"Gobierno medida{i} anuncio{i}", C, minutes=-i) for i in range(6)],
            "https://r.example.com/rss": [make_article("Real Madrid gana la final de Copa", R)],
        }

        result = await make_pipeline(feeds).compute_matched_stories()

        assert result.groups == []

    @pytest.mark.asyncio
    async def test_per_bias_cap(self):
        feeds = budget_feeds()
        feeds["https://c.example.com/rss"] = [
            make_article(f"Noticia{i} reciente{i}", C, minutes=100 + i) for i in range(3)
        ] + feeds["https://c.example.com/rss"]
        settings = ConfigModel(matching={"per_bias_cap": 3})

        result = await make_pipeline(feeds, settings=settings).compute_matched_stories()

        # The matching centrist article is the oldest and falls outside the cap
        assert result.groups == []
        assert result.stats["prepare"]["centrist"] == 3

    @pytest.mark.asyncio
    async def test_limit_groups(self):
        feeds = {url: [] for url in ("https://p.example.com/rss", "https://c.example.com/rss", "https://r.example.com/rss")}
        for i in range(10):
            title = f"Gobierno historia{i} alfa{i} bravo{i}"
            feeds["https://p.example.com/rss"].append(make_article(title, P, minutes=-i))
            feeds["https://c.example.com/rss"].append(make_article(title, C, minutes=-i))
            feeds["https://r.example.com/rss"].append(make_article(title, R, minutes=-i))

        result = await make_pipeline(feeds).compute_matched_stories(limit_groups=5)

        assert len(result.groups) == 5

    @pytest.mark.asyncio
    async def test_tags_attached(self):
        pipeline = make_pipeline(budget_feeds(), categories=StaticCategoryProvider(["Presupuestos"]))

        result = await pipeline.compute_matched_stories()

        assert result.groups[0].tags == ["Presupuestos"]

    @pytest.mark.asyncio
    async def test_tag_store_failure_does_not_fail_matching(self):
        pipeline = make_pipeline(budget_feeds(), categories=BrokenProvider())

        result = await pipeline.compute_matched_stories()

        assert len(result.groups) == 1
        assert result.groups[0].tags is None

    @pytest.mark.asyncio
    async def test_config_special_categories_used_by_default(self):
        settings = ConfigModel(special_categories=["Congreso"])

        result = await make_pipeline(budget_feeds(), settings=settings).compute_matched_stories()

        assert result.groups[0].tags == ["Congreso"]


class TestSnapshotDuringOutage:
    @pytest.mark.asyncio
    async def test_outage_keeps_previous_snapshot(self):
        store = MemorySnapshotStore()
        previous = store.append({"groups": [{"progressive": {"title": "Presupuestos"}}]})
        pipeline = make_pipeline({url: None for url in budget_feeds()})
        cache = SnapshotCache(store, pipeline.compute_matched_stories)

        assert await cache.safe_refresh() is None
        assert len(store) == 1
        assert await cache.read() == previous.payload

    @pytest.mark.asyncio
    async def test_outage_on_cold_start_serves_empty_payload(self):
        pipeline = make_pipeline({url: None for url in budget_feeds()})
        cache = SnapshotCache(MemorySnapshotStore(), pipeline.compute_matched_stories)

        assert await cache.read() == {"groups": []}


class TestFetchNewsByBias:
    @pytest.mark.asyncio
    async def test_newest_first_per_bias_without_filter(self):
        feeds = budget_feeds()
        feeds["https://p.example.com/rss"] += [
            make_article("Real Madrid gana la Copa", P, minutes=30),
            make_article("Nieve en Madrid", P, minutes=-30),
        ]

        columns = await make_pipeline(feeds).fetch_news_by_bias(limit_per_bias=2)

        assert [a.title for a in columns[P]] == [
            "Real Madrid gana la Copa",
            "Congreso aprueba los presupuestos 2026",
        ]
        assert len(columns[C]) == 1
        assert len(columns[R]) == 1

    @pytest.mark.asyncio
    async def test_failed_bias_is_empty(self):
        feeds = budget_feeds()
        feeds["https://r.example.com/rss"] = None

        columns = await make_pipeline(feeds).fetch_news_by_bias()

        assert columns[R] == []
        assert len(columns[P]) == 1

    @pytest.mark.asyncio
    async def test_untitled_articles_are_kept(self):
        feeds = budget_feeds()
        feeds["https://p.example.com/rss"].append(make_article("", P, minutes=10))

        columns = await make_pipeline(feeds).fetch_news_by_bias()

        assert [a.title for a in columns[P]] == ["", "Congreso aprueba los presupuestos 2026"]


class TestPipelineStage:
    def test_records_success_and_stats(self):
        with PipelineStage("fetch", "Fetching") as stage:
            stage.record(articles=3)

        summary = stage.summary()
        assert summary["success"] is True
        assert summary["error"] is None
        assert summary["articles"] == 3
        assert summary["duration"] >= 0

    def test_exception_marks_failure_and_propagates(self):
        stage = PipelineStage("match", "Matching")
        with pytest.raises(ValueError):
            with stage:
                raise ValueError("bad article")

        assert stage.success is False
        assert stage.error == "ValueError: bad article"
