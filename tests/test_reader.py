"""
Integration Tests for the News Reader

Collaborators are mocked at the network boundary so the reader's wiring
(search, memoized summaries, per-article conversations) runs for real.
"""

import json

import pytest
from unittest.mock import Mock

from newsai.assistant.chat import ArticleChatService, ChatError
from newsai.assistant.summarizer import ArticleSummarizer
from newsai.models import NewsArticle
from newsai.news.client import NewsClient
from newsai.reader import NewsReader


@pytest.fixture
def articles():
    return [
        NewsArticle(title="Parliament passes budget", description="Spending plan approved",
                    url="https://example.com/budget", content="The budget includes tax changes"),
        NewsArticle(title="Budget airline expands", description="New routes announced",
                    url="https://example.com/airline"),
        NewsArticle(title="Tax reform debate heats up", description="Lawmakers clash over tax",
                    url="https://example.com/tax", content="Tax tax tax reform"),
    ]


@pytest.fixture
def news_client(articles):
    client = Mock(spec=NewsClient)
    client.fetch_articles.return_value = articles
    return client


@pytest.fixture
def summary_llm():
    llm = Mock()
    llm.invoke.return_value = Mock(content=json.dumps({
        'summary': "A budget passed.",
        'keyPoints': ["Taxes change"],
    }))
    return llm


@pytest.fixture
def chat_llm():
    llm = Mock()
    llm.invoke.side_effect = [Mock(content="First reply"), Mock(content="Second reply")]
    return llm


@pytest.fixture
def reader(news_client, summary_llm, chat_llm):
    return NewsReader(
        news_client=news_client,
        summarizer=ArticleSummarizer(llm=summary_llm),
        chat_service=ArticleChatService(llm=chat_llm)
    )


class TestFetchAndSearch:
    """Test fetching and searching the current article set."""

    def test_fetch_news_stores_articles(self, reader, news_client, articles):
        result = reader.fetch_news("budget")

        news_client.fetch_articles.assert_called_once_with("budget")
        assert result == articles
        assert reader.articles == articles

    def test_text_search_is_default(self, reader):
        reader.fetch_news()

        results = reader.search("budget")

        assert [a.url for a in results] == [
            "https://example.com/budget",
            "https://example.com/airline",
        ]

    def test_semantic_search(self, reader):
        reader.fetch_news()

        results = reader.search("tax reform", mode="semantic")

        assert len(results) == 3
        assert results[0].url == "https://example.com/tax"

    def test_semantic_default_from_config(self, monkeypatch, news_client):
        monkeypatch.setenv('SEARCH_MODE_DEFAULT', 'semantic')
        reader = NewsReader(news_client=news_client, summarizer=Mock(), chat_service=Mock())
        reader.fetch_news()

        results = reader.search("tax reform")

        assert len(results) == 3

    def test_search_explicit_articles(self, reader, articles):
        results = reader.search("airline", articles=articles[:2])

        assert results == [articles[1]]

    def test_rank_with_scores(self, reader):
        reader.fetch_news()

        ranked = reader.rank_with_scores("tax")

        assert ranked[0].document.url == "https://example.com/tax"
        assert ranked[0].score > ranked[-1].score
        assert ranked[-1].score == 0.0


class TestSummaries:
    """Test memoized summaries."""

    def test_summarize(self, reader, articles):
        summary = reader.summarize(articles[0])

        assert summary.summary == "A budget passed."
        assert summary.key_points == ["Taxes change"]

    def test_summary_cached_per_url(self, reader, articles, summary_llm):
        first = reader.summarize(articles[0])
        second = reader.summarize(articles[0])

        assert first is second
        assert summary_llm.invoke.call_count == 1

    def test_description_only_article(self, reader, articles, summary_llm):
        reader.summarize(articles[1])

        assert "Content: New routes announced" in summary_llm.invoke.call_args[0][0]


class TestConversation:
    """Test chatting about the selected article."""

    def test_ask_requires_selection(self, reader):
        with pytest.raises(RuntimeError, match="No article selected"):
            reader.ask("Hi")

    def test_ask_records_turns(self, reader, articles, chat_llm):
        reader.select_article(articles[0])

        assert reader.ask("What passed?") == "First reply"
        assert reader.ask("And then?") == "Second reply"

        messages = reader.get_messages()
        assert [m.content for m in messages] == [
            "What passed?", "First reply", "And then?", "Second reply",
        ]

        second_prompt = chat_llm.invoke.call_args_list[1][0][0]
        assert "Title: Parliament passes budget" in second_prompt
        assert "User: What passed?\n\nAssistant: First reply\n\nUser: And then?" in second_prompt

    def test_selecting_new_article_resets_history(self, reader, articles):
        first_session = reader.select_article(articles[0])
        reader.ask("What passed?")

        second_session = reader.select_article(articles[2])

        assert second_session != first_session
        assert reader.get_messages() == []
        assert first_session not in reader.conversation_manager.sessions

    def test_failed_reply_not_recorded(self, reader, articles, chat_llm):
        chat_llm.invoke.side_effect = RuntimeError("down")
        reader.select_article(articles[0])

        with pytest.raises(ChatError):
            reader.ask("Hi")

        assert reader.get_messages() == []

    def test_back_clears_selection(self, reader, articles):
        reader.select_article(articles[0])

        reader.back()

        assert reader.selected_article is None
        assert reader.session_id is None
        assert reader.get_messages() == []

    def test_stats(self, reader, articles):
        reader.fetch_news()
        reader.select_article(articles[0])
        reader.ask("Q")

        stats = reader.get_stats()

        assert stats['total_articles'] == 3
        assert stats['selected_article'] == "Parliament passes budget"
        assert stats['messages'] == 2
