"""
Navigation and resume-point tests for LearnPath.

The sample course c1 is l1 [A, B], l-empty [], l2 [C].
"""

from learnpath.classroom import (
    ContentCatalog,
    ItemCoordinate,
    NavigationResolver,
    ProgressStore,
    ResumePointResolver,
    first_item,
    next_item,
)
from learnpath.schemas import Course, LearningItem, Lesson


def coord(target):
    return target.coordinate if target else None


class TestNavigation:
    """Test next/previous/first across lesson boundaries."""

    def test_first_item(self, navigator):
        assert coord(navigator.get_first_item("c1")) == ItemCoordinate("l1", "A")

    def test_next_within_lesson(self, navigator):
        assert coord(navigator.get_next_item("c1", "l1", "A")) == ItemCoordinate("l1", "B")

    def test_next_skips_empty_lesson(self, navigator):
        target = navigator.get_next_item("c1", "l1", "B")
        assert target.coordinate == ItemCoordinate("l2", "C")
        assert target.lesson.id == "l2"
        assert target.item.type == "pdf"

    def test_next_at_end(self, navigator):
        assert navigator.get_next_item("c1", "l2", "C") is None

    def test_previous_skips_empty_lesson(self, navigator):
        assert coord(navigator.get_previous_item("c1", "l2", "C")) == ItemCoordinate("l1", "B")

    def test_previous_within_lesson(self, navigator):
        assert coord(navigator.get_previous_item("c1", "l1", "B")) == ItemCoordinate("l1", "A")

    def test_previous_at_start(self, navigator):
        assert navigator.get_previous_item("c1", "l1", "A") is None

    def test_unknown_coordinates(self, navigator):
        assert navigator.get_next_item("c1", "l1", "Z") is None
        assert navigator.get_next_item("c1", "l2", "A") is None
        assert navigator.get_previous_item("c1", "nope", "A") is None
        assert navigator.get_next_item("missing", "l1", "A") is None
        assert navigator.get_first_item("missing") is None

    def test_course_without_items(self, navigator):
        assert navigator.get_first_item("hollow") is None

    def test_follows_list_order_not_order_field(self):
        lessons = [
            Lesson(id="second", order=2, learning_items=[LearningItem(id="s", type="url", order=1)]),
            Lesson(id="first", order=1, learning_items=[LearningItem(id="f", type="url", order=1)]),
        ]
        assert first_item(lessons).item.id == "s"
        assert next_item(lessons, "second", "s").item.id == "f"

    def test_item_position(self, navigator):
        assert navigator.get_item_position("c1", "l1", "A") == (1, 3)
        assert navigator.get_item_position("c1", "l2", "C") == (3, 3)
        assert navigator.get_item_position("c1", "l1", "Z") == (0, 3)
        assert navigator.get_item_position("missing", "l1", "A") == (0, 0)


class TestResumePoint:
    """Test resume precedence."""

    def test_fresh_course_starts_at_first_item(self, resume):
        assert resume.get_resume_point("c1") == ItemCoordinate("l1", "A")

    def test_incomplete_last_viewed(self, progress, resume):
        progress.mark_item_started("c1", "l1", "B")
        assert resume.get_resume_point("c1") == ItemCoordinate("l1", "B")

    def test_completed_last_viewed_moves_on(self, progress, resume):
        progress.mark_item_completed("c1", "l1", "A")
        assert resume.get_resume_point("c1") == ItemCoordinate("l1", "B")

        progress.mark_item_completed("c1", "l1", "B")
        assert resume.get_resume_point("c1") == ItemCoordinate("l2", "C")

    def test_completed_last_item_falls_back_to_scan(self, progress, resume):
        progress.mark_item_completed("c1", "l2", "C")
        assert resume.get_resume_point("c1") == ItemCoordinate("l1", "A")

    def test_next_item_returned_even_if_completed(self, progress, resume):
        progress.mark_item_completed("c1", "l1", "B")
        progress.mark_item_completed("c1", "l1", "A")
        # Last viewed A is done; B follows it
        assert resume.get_resume_point("c1") == ItemCoordinate("l1", "B")

    def test_everything_completed(self, progress, resume):
        progress.mark_item_completed("c1", "l1", "A")
        progress.mark_item_completed("c1", "l2", "C")
        progress.mark_item_completed("c1", "l1", "B")
        # B -> C is completed, but C is still the item after B
        assert resume.get_resume_point("c1") == ItemCoordinate("l2", "C")

        progress.mark_item_started("c1", "l2", "C")
        assert resume.get_resume_point("c1") == ItemCoordinate("l1", "A")

    def test_unknown_or_empty_course(self, resume):
        assert resume.get_resume_point("missing") is None
        assert resume.get_resume_point("hollow") is None

    def test_stale_pointer_is_ignored(self, documents, catalog, clock):
        old_catalog = ContentCatalog([
            Course(id="c1", lessons=[
                Lesson(id="l1", learning_items=[
                    LearningItem(id="A", type="url"),
                    LearningItem(id="Old", type="url"),
                ]),
            ]),
        ])
        ProgressStore(documents, old_catalog, clock=clock).mark_item_started("c1", "l1", "Old")

        progress = ProgressStore(documents, catalog, clock=clock)
        resolver = ResumePointResolver(progress, NavigationResolver(catalog))
        assert resolver.get_resume_point("c1") == ItemCoordinate("l1", "A")
