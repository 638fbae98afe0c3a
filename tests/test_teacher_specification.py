import pytest
from sqlalchemy.sql.elements import True_

from app.schemas.teacher_filters import TeacherFilters
from app.services.teacher_service import TeacherService
from app.services.teacher_specification import build_teacher_predicate

from conftest import make_teacher, teacher_insert


@pytest.fixture
async def seeded(db):
    """Seven teachers, the even-numbered ones with an inactive user"""
    teachers = [
        make_teacher(1, uuid="XAB3Y9"),
        make_teacher(2, uuid="XYZ123", user_active=False),
        make_teacher(3, uuid="ab3-lower"),
        make_teacher(4, uuid="T4-0000", user_active=False),
        make_teacher(5, uuid="T5-0000"),
        make_teacher(6, uuid="T6-0000", user_active=False),
        make_teacher(7, uuid="T7-0000"),
    ]
    db.add_all(teachers)
    await db.commit()
    return teachers


def test_empty_filters_compile_to_true():
    assert isinstance(build_teacher_predicate(TeacherFilters()), True_)
    assert isinstance(build_teacher_predicate(None), True_)


def test_blank_strings_compile_to_true():
    filters = TeacherFilters(uuid="   ", user_vat="", user_amka=" ")

    assert isinstance(build_teacher_predicate(filters), True_)


async def test_empty_filter_matches_filterless_listing(db, seeded):
    service = TeacherService(db)

    filtered = await service.get_teachers_filtered_paginated(TeacherFilters(page=0, page_size=5))
    listing = await service.get_paginated_teachers(page=0, size=5)

    assert [t.id for t in filtered.items] == [t.id for t in listing.items]
    assert filtered == listing
    assert listing.total == 7
    assert listing.total_pages == 2
    assert listing.has_next is True
    assert listing.has_previous is False


async def test_listing_is_sorted_by_ascending_id(db, seeded):
    page = await TeacherService(db).get_paginated_teachers(page=0, size=10)

    ids = [t.id for t in page.items]
    assert ids == sorted(ids)
    assert ids == [t.id for t in seeded]


async def test_second_page(db, seeded):
    page = await TeacherService(db).get_paginated_teachers(page=1, size=5)

    assert [t.id for t in page.items] == [t.id for t in seeded[5:]]
    assert page.has_next is False
    assert page.has_previous is True


async def test_active_filter_counts_only_matching_teachers(db, seeded):
    page = await TeacherService(db).get_teachers_filtered_paginated(TeacherFilters(active=True, page_size=10))

    expected = [t.id for t in seeded if t.user.is_active]
    assert [t.id for t in page.items] == expected
    assert page.total == len(expected) == 4
    assert page.total_pages == 1


async def test_inactive_filter(db, seeded):
    page = await TeacherService(db).get_teachers_filtered_paginated(TeacherFilters(active=False))

    assert {t.user.vat for t in page.items} == {"200000002", "200000004", "200000006"}
    assert page.total == 3


async def test_total_pages_follow_filtered_count(db, seeded):
    page = await TeacherService(db).get_teachers_filtered_paginated(TeacherFilters(active=True, page_size=3))

    assert page.total == 4
    assert page.total_pages == 2
    assert len(page.items) == 3


async def test_uuid_filter_is_case_insensitive_substring(db, seeded):
    page = await TeacherService(db).get_teachers_filtered_paginated(TeacherFilters(uuid="ab3"))

    uuids = [t.uuid for t in page.items]
    assert "XAB3Y9" in uuids
    assert "ab3-lower" in uuids
    assert "XYZ123" not in uuids
    assert page.total == 2


async def test_uuid_filter_treats_wildcards_literally(db, seeded):
    page = await TeacherService(db).get_teachers_filtered_paginated(TeacherFilters(uuid="%"))

    assert page.items == []
    assert page.total == 0


async def test_vat_filter_is_exact(db, seeded):
    service = TeacherService(db)

    exact = await service.get_teachers_filtered_paginated(TeacherFilters(user_vat="200000003"))
    partial = await service.get_teachers_filtered_paginated(TeacherFilters(user_vat="20000000"))

    assert [t.uuid for t in exact.items] == ["ab3-lower"]
    assert partial.total == 0


async def test_amka_filter_is_exact(db, seeded):
    page = await TeacherService(db).get_teachers_filtered_paginated(TeacherFilters(user_amka="20000000005"))

    assert page.total == 1
    assert page.items[0].personal_info.amka == "20000000005"


async def test_filters_are_combined_with_and(db, seeded):
    service = TeacherService(db)

    both = await service.get_teachers_filtered_paginated(TeacherFilters(uuid="XYZ", active=False))
    contradicting = await service.get_teachers_filtered_paginated(TeacherFilters(uuid="XYZ", active=True))

    assert [t.uuid for t in both.items] == ["XYZ123"]
    assert contradicting.total == 0


async def test_descending_sort(db, seeded):
    page = await TeacherService(db).get_teachers_filtered_paginated(
        TeacherFilters(sort_direction="DESC", page_size=10)
    )

    assert [t.id for t in page.items] == [t.id for t in reversed(seeded)]


async def test_inserted_teacher_round_trips_through_uuid_filter(db, storage, seeded):
    service = TeacherService(db, storage)
    saved = await service.save_teacher(teacher_insert(1))

    page = await service.get_teachers_filtered_paginated(TeacherFilters(uuid=saved.uuid))

    assert page.total == 1
    assert page.items == [saved]
