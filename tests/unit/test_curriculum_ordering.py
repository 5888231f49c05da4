from types import SimpleNamespace

from mentorpath.core.curriculum import item_limit, order_items, recommend_items


def _item(item_id: int, difficulty: str, display_order: int) -> SimpleNamespace:
    return SimpleNamespace(id=item_id, difficulty=difficulty, display_order=display_order)


def test_item_limit_by_time_commitment() -> None:
    assert item_limit("casual") == 3
    assert item_limit("regular") == 5
    assert item_limit("intensive") == 8
    assert item_limit(None) == 5
    assert item_limit("weekends only") == 5


def test_items_ordered_by_difficulty_then_display_order() -> None:
    items = [
        _item(1, "Advanced", 1),
        _item(2, "Beginner", 3),
        _item(3, "Intermediate", 2),
        _item(4, "Beginner", 1),
    ]
    assert [item.id for item in order_items(items)] == [4, 2, 3, 1]


def test_unknown_difficulty_ranks_with_intermediate() -> None:
    items = [_item(1, "Advanced", 1), _item(2, "Expert", 1), _item(3, "Beginner", 9)]
    assert [item.id for item in order_items(items)] == [3, 2, 1]


def test_recommend_truncates_after_ordering() -> None:
    items = [_item(index, "Advanced", index) for index in range(1, 5)]
    items.append(_item(99, "Beginner", 50))
    picked = recommend_items(items, "casual")
    assert [item.id for item in picked] == [99, 1, 2]
