"""Tests for response models and task-list decoding."""

import pytest

from deskup.core.models import Anniversary, Holiday, Joke, TaskItem, Weather
from deskup.core.tasks import parse_task_results, title_text


def notion_page(page_id, *segments, prop_name="Name"):
    return {
        "id": page_id,
        "properties": {
            "Status": {"type": "status", "status": {"name": "Not started"}},
            prop_name: {
                "type": "title",
                "title": [{"type": "text", "plain_text": s} for s in segments],
            },
        },
    }


class TestWeather:
    def test_from_api(self):
        data = {
            "weather": [{"description": "晴天", "main": "Clear"}],
            "main": {"temp": 300.0, "humidity": 40, "pressure": 1012},
            "name": "Tokyo",
        }
        weather = Weather.from_api(data)
        assert weather == Weather(description="晴天", temp_kelvin=300.0, humidity=40)

    def test_no_conditions_is_decode_error(self):
        with pytest.raises(ValueError):
            Weather.from_api({"weather": [], "main": {"temp": 1, "humidity": 1}})

    def test_missing_main_is_decode_error(self):
        with pytest.raises(KeyError):
            Weather.from_api({"weather": [{"description": "x"}]})


class TestJoke:
    def test_text_joins_setup_and_punchline(self):
        joke = Joke.from_api({"id": 1, "type": "general", "setup": "Why?", "punchline": "Because."})
        assert joke.text == "Why? - Because."


class TestAnniversary:
    def test_list_from_api(self):
        data = {
            "anniversaries": [
                {"name": "海の日", "description": "海に感謝する日"},
                {"name": "テストの日", "description": "説明"},
            ]
        }
        items = Anniversary.list_from_api(data)
        assert items[0] == Anniversary("海の日", "海に感謝する日")
        assert len(items) == 2


class TestHoliday:
    def test_list_from_api(self):
        data = [
            {"date": "2025-01-01", "localName": "元日", "name": "New Year's Day", "countryCode": "JP"},
        ]
        assert Holiday.list_from_api(data) == [Holiday("2025-01-01", "New Year's Day", "元日")]

    def test_non_list_is_decode_error(self):
        with pytest.raises(ValueError):
            Holiday.list_from_api({"status": 404})


class TestTaskDecode:
    def test_single_segment_title(self):
        tasks = parse_task_results([notion_page("abc-123", "Buy milk")])
        assert tasks == [TaskItem(id="abc-123", title="Buy milk")]

    def test_empty_title_excluded(self):
        tasks = parse_task_results([notion_page("empty"), notion_page("abc-123", "Buy milk")])
        assert [t.id for t in tasks] == ["abc-123"]

    def test_whitespace_title_excluded(self):
        assert parse_task_results([notion_page("blank", "  ")]) == []

    def test_segments_are_joined(self):
        page = notion_page("p1", "Call ", "mom")
        assert title_text(page) == "Call mom"

    def test_title_property_found_by_type(self):
        page = notion_page("p1", "Task", prop_name="タスク名")
        assert parse_task_results([page]) == [TaskItem("p1", "Task")]

    def test_page_without_title_property(self):
        assert title_text({"id": "x", "properties": {}}) == ""
