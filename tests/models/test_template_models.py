"""Tests for the task template models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from homeboard_cli.models import TaskTemplate, TaskTemplateCreate

NOW = datetime(2024, 3, 1, tzinfo=UTC)


class TestTaskTemplateCreate:
    def test_defaults(self):
        template = TaskTemplateCreate(name="bins", title="Take out bins")
        assert template.priority == "medium"
        assert template.repeat_interval is None
        assert template.repeat_days == frozenset()
        assert template.repeat_days_text() == ""

    def test_time_is_normalised(self):
        assert TaskTemplateCreate(name="vet", title="Vet", default_time="9:05").default_time == "09:05"

    def test_repeat_days_text_is_sorted(self):
        template = TaskTemplateCreate(
            name="bins", title="Bins", repeat_interval="weekly", repeat_days={5, 1}
        )
        assert template.repeat_days_text() == "1,5"

    def test_days_without_interval_rejected(self):
        with pytest.raises(ValidationError, match="repeat days need a repeat interval"):
            TaskTemplateCreate(name="bins", title="Bins", repeat_days={1})

    @pytest.mark.parametrize(
        "fields",
        [
            {"name": ""},
            {"title": ""},
            {"priority": "meh"},
            {"repeat_interval": "daily"},
            {"repeat_interval": "weekly", "repeat_days": {7}},
            {"default_time": "25:00"},
        ],
    )
    def test_invalid_fields(self, fields):
        with pytest.raises(ValidationError):
            TaskTemplateCreate(**{"name": "bins", "title": "Bins", **fields})


class TestTaskTemplate:
    def _template(self, **fields):
        return TaskTemplate(
            id="t1",
            name="bins",
            title="Bins",
            created_by="sam",
            created_at=NOW,
            updated_at=NOW,
            **fields,
        )

    def test_stored_days_are_split(self):
        template = self._template(repeat_interval="weekly", repeat_days="1,5")
        assert template.repeat_days == [1, 5]
        assert template.is_recurring is True

    def test_empty_stored_days(self):
        template = self._template(repeat_days="")
        assert template.repeat_days == []
        assert template.is_recurring is False
