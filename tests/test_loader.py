"""
Catalog and quiz bank loader tests for LearnPath.
"""

import asyncio
import json
import logging

import pytest

from learnpath.classroom import CatalogLoader, LoadState, QuizBankLoader, read_config_file
from learnpath.errors import CatalogUnavailableError


COURSES = {
    "courses": [
        {
            "id": "c1",
            "lessons": [
                {"id": "l1", "learningItems": [{"id": "A", "type": "url"}]},
            ],
        }
    ]
}


class TestReadConfigFile:
    """Test JSON/YAML reading by suffix."""

    def test_json(self, tmp_path):
        path = tmp_path / "courses.config.json"
        path.write_text(json.dumps(COURSES), encoding="utf-8")
        assert read_config_file(path)["courses"][0]["id"] == "c1"

    def test_yaml(self, tmp_path):
        path = tmp_path / "courses.yaml"
        path.write_text(
            "courses:\n"
            "  - id: c1\n"
            "    lessons:\n"
            "      - id: l1\n"
            "        learningItems:\n"
            "          - id: A\n"
            "            type: url\n",
            encoding="utf-8",
        )
        assert read_config_file(path) == COURSES


class TestCatalogLoader:
    """Test one-shot loading and retry."""

    def test_requires_a_source(self):
        with pytest.raises(ValueError):
            CatalogLoader()

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "courses.config.json"
        path.write_text(json.dumps(COURSES), encoding="utf-8")
        loader = CatalogLoader(path)

        catalog = asyncio.run(loader.ready())

        assert loader.state == LoadState.READY
        assert len(catalog) == 1
        assert catalog.get_total_items_in_course("c1") == 1

    def test_missing_file(self, tmp_path):
        loader = CatalogLoader(tmp_path / "missing.json")
        with pytest.raises(CatalogUnavailableError) as exc_info:
            asyncio.run(loader.ready())
        assert loader.state == LoadState.FAILED
        assert exc_info.value.code == "catalog_unavailable"
        assert loader.error

    def test_fetches_once(self):
        calls = []

        async def fetch():
            calls.append(1)
            await asyncio.sleep(0)
            return COURSES

        loader = CatalogLoader(fetcher=fetch)

        async def main():
            first, second = await asyncio.gather(loader.ready(), loader.ready())
            third = await loader.ready()
            return first, second, third

        first, second, third = asyncio.run(main())
        assert len(calls) == 1
        assert first is second is third

    def test_retry_after_failure(self):
        responses = [{"courses": "broken"}, COURSES]

        async def fetch():
            return responses.pop(0)

        loader = CatalogLoader(fetcher=fetch)

        async def main():
            with pytest.raises(CatalogUnavailableError):
                await loader.ready()
            assert loader.state == LoadState.FAILED
            return await loader.ready()

        catalog = asyncio.run(main())
        assert loader.state == LoadState.READY
        assert loader.error is None
        assert catalog.get_course_by_id("c1") is not None

    def test_unexpected_fetch_error_fails_and_retries(self):
        class FetchError(Exception):
            pass

        calls = []

        async def fetch():
            calls.append(1)
            if len(calls) == 1:
                raise FetchError("service unavailable")
            return COURSES

        loader = CatalogLoader(fetcher=fetch)

        async def main():
            with pytest.raises(CatalogUnavailableError) as exc_info:
                await asyncio.wait_for(loader.ready(), timeout=1)
            assert isinstance(exc_info.value.__cause__, FetchError)
            assert loader.state == LoadState.FAILED
            return await asyncio.wait_for(loader.ready(), timeout=1)

        catalog = asyncio.run(main())
        assert len(calls) == 2
        assert loader.state == LoadState.READY
        assert len(catalog) == 1

    def test_duplicate_ids_fail(self):
        async def fetch():
            return {"courses": [{"id": "c1", "lessons": [{"id": "l1"}, {"id": "l1"}]}]}

        loader = CatalogLoader(fetcher=fetch)
        with pytest.raises(CatalogUnavailableError):
            asyncio.run(loader.ready())

    def test_unordered_warns(self, caplog):
        async def fetch():
            return {"courses": [{"id": "c1", "lessons": [
                {"id": "l1", "order": 2},
                {"id": "l2", "order": 1},
            ]}]}

        with caplog.at_level(logging.WARNING, logger="learnpath.classroom.loader"):
            catalog = asyncio.run(CatalogLoader(fetcher=fetch).ready())

        assert "not strictly increasing" in caplog.text
        assert [lesson.id for lesson in catalog.get_course_by_id("c1").lessons] == ["l1", "l2"]


class TestQuizBankLoader:
    """Test quiz bank loading."""

    def test_load(self):
        async def fetch():
            return {"quizzes": [{
                "id": "q",
                "courseId": "c1",
                "passingScore": 60,
                "questions": [{"id": "q1", "type": "true-false", "correctAnswer": "true"}],
            }]}

        bank = asyncio.run(QuizBankLoader(fetcher=fetch).ready())
        assert len(bank) == 1
        assert bank.get_quiz_by_course_id("c1").id == "q"
        assert bank.get_quiz_by_id("other") is None

    def test_invalid_quiz_fails(self):
        async def fetch():
            return {"quizzes": [{"id": "q", "courseId": "c1", "passingScore": 400}]}

        loader = QuizBankLoader(fetcher=fetch)
        with pytest.raises(CatalogUnavailableError):
            asyncio.run(loader.ready())
        assert loader.state == LoadState.FAILED
