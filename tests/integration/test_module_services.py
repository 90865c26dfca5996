"""Integration tests for ModuleGroupService and ModuleService."""

import pytest
from pydantic import ValidationError

from lms_modules.domain.exceptions import EntityNotFoundError
from lms_modules.domain.services import ModuleGroupService, ModuleService
from lms_modules.infrastructure.schemas import (
    ModuleCreate,
    ModuleFunctionCreate,
    ModuleGroupCreate,
    ModuleGroupUpdate,
    ModuleUpdate,
)


def _group_payload(name: str = "Content Management", *modules: ModuleCreate) -> ModuleGroupCreate:
    return ModuleGroupCreate(
        name=name,
        description="Manage courses, modules, and educational content",
        icon="FolderOpen",
        url="/admin/content",
        modules=list(modules),
    )


@pytest.mark.asyncio
async def test_create_group_with_nested_modules(db_session, admin_user, clock):
    service = ModuleGroupService(db_session, clock)
    payload = _group_payload(
        "Content Management",
        ModuleCreate(
            name="Courses",
            url="/admin/content/courses",
            module_functions=[ModuleFunctionCreate(name="Create course", code="course.create")],
        ),
        ModuleCreate(name="Lessons", url="/admin/content/lessons"),
    )

    group = await service.create_group(payload, admin_user.id)

    assert group.id is not None
    assert group.created_by_id == admin_user.id
    assert group.updated_by_id == admin_user.id
    assert [m.name for m in group.modules] == ["Courses", "Lessons"]
    assert all(m.module_group_id == group.id for m in group.modules)
    assert group.modules[0].module_functions[0].code == "course.create"
    assert group.modules[0].created_at == group.created_at


@pytest.mark.asyncio
async def test_create_group_unknown_user(db_session):
    service = ModuleGroupService(db_session)

    with pytest.raises(EntityNotFoundError) as exc_info:
        await service.create_group(_group_payload(), 42)

    assert exc_info.value.entity == "User"


@pytest.mark.asyncio
async def test_get_group_not_found(db_session):
    service = ModuleGroupService(db_session)

    with pytest.raises(EntityNotFoundError, match="ModuleGroup '7' not found"):
        await service.get_group(7)


@pytest.mark.asyncio
async def test_list_groups_reports_module_counts(db_session, admin_user, clock):
    service = ModuleGroupService(db_session, clock)
    content = await service.create_group(
        _group_payload("Content", ModuleCreate(name="Courses", url="/c"), ModuleCreate(name="Quizzes", url="/q")),
        admin_user.id,
    )
    analytics = await service.create_group(_group_payload("Analytics"), admin_user.id)

    listed = await service.list_groups()

    assert [(g.id, count) for g, count in listed] == [(content.id, 2), (analytics.id, 0)]


@pytest.mark.asyncio
async def test_update_group_records_editor(db_session, admin_user, editor_user, clock):
    service = ModuleGroupService(db_session, clock)
    created = await service.create_group(_group_payload(), admin_user.id)

    updated = await service.update_group(
        created.id,
        ModuleGroupUpdate(name="Content", description=None),
        editor_user.id,
    )

    assert updated.name == "Content"
    assert updated.description is None
    assert updated.icon == "FolderOpen"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert updated.created_by_id == admin_user.id
    assert updated.updated_by_id == editor_user.id


@pytest.mark.asyncio
async def test_add_and_remove_module(db_session, admin_user, clock):
    group_service = ModuleGroupService(db_session, clock)
    module_service = ModuleService(db_session, clock)
    group = await group_service.create_group(_group_payload(), admin_user.id)

    module = await group_service.add_module(
        group.id,
        ModuleCreate(
            name="Courses",
            url="/admin/content/courses",
            module_functions=[ModuleFunctionCreate(name="Publish", code="course.publish")],
        ),
        admin_user.id,
    )

    assert module.module_group_id == group.id
    assert [m.id for m in await module_service.list_by_group(group.id)] == [module.id]

    await group_service.remove_module(group.id, module.id, admin_user.id)

    assert await module_service.list_by_group(group.id) == []
    with pytest.raises(EntityNotFoundError):
        await module_service.get_module(module.id)
    assert (await group_service.get_group(group.id)).modules == []


@pytest.mark.asyncio
async def test_remove_module_from_wrong_group(db_session, admin_user, clock):
    service = ModuleGroupService(db_session, clock)
    content = await service.create_group(
        _group_payload("Content", ModuleCreate(name="Courses", url="/c")), admin_user.id
    )
    analytics = await service.create_group(_group_payload("Analytics"), admin_user.id)

    with pytest.raises(EntityNotFoundError, match="Module"):
        await service.remove_module(analytics.id, content.modules[0].id, admin_user.id)


@pytest.mark.asyncio
async def test_delete_group(db_session, admin_user, clock):
    service = ModuleGroupService(db_session, clock)
    module_service = ModuleService(db_session, clock)
    group = await service.create_group(
        _group_payload("Content", ModuleCreate(name="Courses", url="/c")), admin_user.id
    )

    await service.delete_group(group.id)

    with pytest.raises(EntityNotFoundError):
        await service.get_group(group.id)
    assert await module_service.list_modules() == []
    with pytest.raises(EntityNotFoundError):
        await service.delete_group(group.id)


@pytest.mark.asyncio
async def test_build_menu_nests_modules_without_back_reference(db_session, admin_user, clock):
    service = ModuleGroupService(db_session, clock)
    await service.create_group(
        _group_payload(
            "Content",
            ModuleCreate(
                name="Courses",
                url="/c",
                module_functions=[ModuleFunctionCreate(name="Create", code="course.create")],
            ),
        ),
        admin_user.id,
    )
    await service.create_group(_group_payload("Analytics"), admin_user.id)

    menu = [g.model_dump(mode="json") for g in await service.build_menu()]

    assert [g["name"] for g in menu] == ["Content", "Analytics"]
    module = menu[0]["modules"][0]
    assert module["module_group_id"] == menu[0]["id"]
    assert module["module_functions"][0]["code"] == "course.create"
    assert "module_group" not in module
    assert menu[1]["modules"] == []


@pytest.mark.asyncio
async def test_update_module(db_session, admin_user, editor_user, clock):
    group_service = ModuleGroupService(db_session, clock)
    module_service = ModuleService(db_session, clock)
    group = await group_service.create_group(
        _group_payload("Content", ModuleCreate(name="Courses", url="/c")), admin_user.id
    )
    original = group.modules[0]

    updated = await module_service.update_module(
        original.id, ModuleUpdate(name="Course Catalog", icon="BookOpen"), editor_user.id
    )

    assert updated.name == "Course Catalog"
    assert updated.icon == "BookOpen"
    assert updated.url == "/c"
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at
    assert updated.updated_by_id == editor_user.id


@pytest.mark.asyncio
async def test_move_module_between_groups(db_session, admin_user, clock):
    group_service = ModuleGroupService(db_session, clock)
    module_service = ModuleService(db_session, clock)
    content = await group_service.create_group(
        _group_payload("Content", ModuleCreate(name="Reports", url="/r")), admin_user.id
    )
    analytics = await group_service.create_group(_group_payload("Analytics"), admin_user.id)
    module_id = content.modules[0].id

    moved = await module_service.move_module(module_id, analytics.id, admin_user.id)

    assert moved.module_group_id == analytics.id
    assert await module_service.list_by_group(content.id) == []
    assert [m.id for m in await module_service.list_by_group(analytics.id)] == [module_id]
    assert [m.id for m in (await group_service.get_group(analytics.id)).modules] == [module_id]


@pytest.mark.asyncio
async def test_move_module_to_missing_group(db_session, admin_user, clock):
    group_service = ModuleGroupService(db_session, clock)
    module_service = ModuleService(db_session, clock)
    group = await group_service.create_group(
        _group_payload("Content", ModuleCreate(name="Reports", url="/r")), admin_user.id
    )

    with pytest.raises(EntityNotFoundError, match="ModuleGroup '99' not found"):
        await module_service.move_module(group.modules[0].id, 99, admin_user.id)


@pytest.mark.asyncio
async def test_add_function_and_delete_module(db_session, admin_user, clock):
    group_service = ModuleGroupService(db_session, clock)
    module_service = ModuleService(db_session, clock)
    group = await group_service.create_group(
        _group_payload("Content", ModuleCreate(name="Courses", url="/c")), admin_user.id
    )
    module_id = group.modules[0].id

    function = await module_service.add_function(
        module_id, ModuleFunctionCreate(name="Archive", code="course.archive"), admin_user.id
    )

    assert function.module_id == module_id
    assert [f.code for f in (await module_service.get_module(module_id)).module_functions] == [
        "course.archive"
    ]

    await module_service.delete_module(module_id)

    with pytest.raises(EntityNotFoundError):
        await module_service.get_module(module_id)
    with pytest.raises(EntityNotFoundError):
        await module_service.delete_module(module_id)


@pytest.mark.asyncio
async def test_list_by_unknown_group_is_empty(db_session):
    assert await ModuleService(db_session).list_by_group(123) == []


@pytest.mark.asyncio
async def test_blank_module_name_never_reaches_storage(db_session, admin_user, clock):
    group_service = ModuleGroupService(db_session, clock)
    module_service = ModuleService(db_session, clock)
    group = await group_service.create_group(
        _group_payload("Content", ModuleCreate(name="Courses", url="/c")), admin_user.id
    )

    with pytest.raises(ValidationError):
        await group_service.add_module(
            group.id, ModuleCreate.model_validate({"name": "   ", "url": "/m"}), admin_user.id
        )
    with pytest.raises(ValidationError):
        await module_service.update_module(
            group.modules[0].id, ModuleUpdate.model_validate({"name": "   "}), admin_user.id
        )
    await db_session.commit()

    assert [m.name for m in await module_service.list_by_group(group.id)] == ["Courses"]
    menu = await group_service.build_menu()
    assert [m.name for m in menu[0].modules] == ["Courses"]


@pytest.mark.asyncio
async def test_empty_update_leaves_audit_fields(db_session, admin_user, editor_user, clock):
    group_service = ModuleGroupService(db_session, clock)
    module_service = ModuleService(db_session, clock)
    group = await group_service.create_group(
        _group_payload("Content", ModuleCreate(name="Courses", url="/c")), admin_user.id
    )
    module = group.modules[0]

    unchanged_group = await group_service.update_group(
        group.id, ModuleGroupUpdate(icon=None), editor_user.id
    )
    unchanged_module = await module_service.update_module(module.id, ModuleUpdate(), editor_user.id)

    assert unchanged_group.updated_at == group.updated_at
    assert unchanged_group.updated_by_id == admin_user.id
    assert unchanged_module.updated_at == module.updated_at
    assert unchanged_module.updated_by_id == admin_user.id


@pytest.mark.asyncio
async def test_new_module_records_creator_as_updater(db_session, admin_user, clock):
    service = ModuleGroupService(db_session, clock)
    group = await service.create_group(_group_payload(), admin_user.id)

    module = await service.add_module(group.id, ModuleCreate(name="Courses", url="/c"), admin_user.id)

    assert module.updated_by_id == admin_user.id
