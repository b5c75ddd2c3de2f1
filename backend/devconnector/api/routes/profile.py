"""Profile Routes — upsert/read/delete profiles and their experience/education entries.

Invariants:
    - A user has at most one profile; POST /api/profile creates or updates it
    - Entries are inserted at the front and removed by their own "_id"
    - Removing an unknown entry is an explicit 404, not a silent no-op
    - DELETE /api/profile removes the caller's posts, profile and user together
"""

import logging

from fastapi import APIRouter, Depends

from devconnector.api.pipeline import (
    get_posts, get_profiles, get_users, parse_id, pipeline,
)
from devconnector.core.build_profile import build_profile_fields
from devconnector.core.domain_types import Action, RequestContext
from devconnector.core.enforce_ownership import require_allowed
from devconnector.core.errors import (
    ErrorContext, ProfileMissingError, ResourceNotFoundError,
)
from devconnector.core.sub_entries import prepend_entry, remove_entry
from devconnector.core.validate_payload import required
from devconnector.models.profile import Profile
from devconnector.repositories.posts import PostRepository
from devconnector.repositories.profiles import ProfileRepository
from devconnector.repositories.users import UserRepository
from devconnector.schemas.profile import (
    EducationCreate, ExperienceCreate, ProfileResponse, ProfileUpsert,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/profile", tags=["profile"])

PROFILE_RULES = (
    required("status", "status is required"),
    required("skills", "skills is required"),
)
EXPERIENCE_RULES = (
    required("title", "title is required"),
    required("company", "company is required"),
    required("from", "from date is required"),
)
EDUCATION_RULES = (
    required("school", "school is required"),
    required("degree", "degree is required"),
    required("from", "from date is required"),
)


async def _own_profile_or_400(
    ctx: RequestContext, profiles: ProfileRepository,
) -> Profile:
    """Load the caller's profile for mutation."""
    profile = await profiles.get_by_user(ctx.user_id)
    if profile is None:
        raise ProfileMissingError(ErrorContext(user_id=str(ctx.user_id)))
    require_allowed(ctx.identity, Action.MUTATE_PROFILE, profile.user_id)
    return profile


@router.get("/me", response_model=ProfileResponse)
async def my_profile(
    ctx: RequestContext = Depends(pipeline()),
    profiles: ProfileRepository = Depends(get_profiles),
):
    profile = await profiles.get_by_user(ctx.user_id)
    if profile is None:
        raise ProfileMissingError(ErrorContext(user_id=str(ctx.user_id)))
    return profile


@router.post("", response_model=ProfileResponse)
async def upsert_profile(
    ctx: RequestContext = Depends(
        pipeline(*PROFILE_RULES, schema=ProfileUpsert),
    ),
    profiles: ProfileRepository = Depends(get_profiles),
    users: UserRepository = Depends(get_users),
):
    """Create or update the caller's profile."""
    if await users.get(ctx.user_id) is None:
        raise ResourceNotFoundError("User", str(ctx.user_id))
    body: ProfileUpsert = ctx.body
    fields = build_profile_fields(body.model_dump())
    return await profiles.upsert(ctx.user_id, fields)


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(
    profiles: ProfileRepository = Depends(get_profiles),
):
    return await profiles.list_all()


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def profile_by_user(
    ctx: RequestContext = Depends(pipeline(authenticated=False)),
    profiles: ProfileRepository = Depends(get_profiles),
):
    try:
        user_id = parse_id(ctx.params["user_id"], "Profile")
    except ResourceNotFoundError as e:
        raise ProfileMissingError() from e
    profile = await profiles.get_by_user(user_id)
    if profile is None:
        raise ProfileMissingError()
    return profile


@router.delete("")
async def delete_account(
    ctx: RequestContext = Depends(pipeline()),
    posts: PostRepository = Depends(get_posts),
    profiles: ProfileRepository = Depends(get_profiles),
    users: UserRepository = Depends(get_users),
):
    """Delete the caller's posts, profile and user."""
    await posts.delete_by_user(ctx.user_id)
    await profiles.delete_by_user(ctx.user_id)
    await users.delete(ctx.user_id)
    return {"msg": "User deleted"}


@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    ctx: RequestContext = Depends(
        pipeline(*EXPERIENCE_RULES, schema=ExperienceCreate),
    ),
    profiles: ProfileRepository = Depends(get_profiles),
):
    profile = await _own_profile_or_400(ctx, profiles)
    profile.experience, _ = prepend_entry(
        profile.experience, ctx.body.model_dump(by_alias=True),
    )
    return await profiles.save(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def delete_experience(
    ctx: RequestContext = Depends(pipeline()),
    profiles: ProfileRepository = Depends(get_profiles),
):
    profile = await _own_profile_or_400(ctx, profiles)
    remaining, removed = remove_entry(profile.experience, ctx.params["exp_id"])
    if removed is None:
        raise ResourceNotFoundError("Experience", ctx.params["exp_id"])
    profile.experience = remaining
    return await profiles.save(profile)


@router.put("/education", response_model=ProfileResponse)
async def add_education(
    ctx: RequestContext = Depends(
        pipeline(*EDUCATION_RULES, schema=EducationCreate),
    ),
    profiles: ProfileRepository = Depends(get_profiles),
):
    profile = await _own_profile_or_400(ctx, profiles)
    profile.education, _ = prepend_entry(
        profile.education, ctx.body.model_dump(by_alias=True),
    )
    return await profiles.save(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def delete_education(
    ctx: RequestContext = Depends(pipeline()),
    profiles: ProfileRepository = Depends(get_profiles),
):
    profile = await _own_profile_or_400(ctx, profiles)
    remaining, removed = remove_entry(profile.education, ctx.params["edu_id"])
    if removed is None:
        raise ResourceNotFoundError("Education", ctx.params["edu_id"])
    profile.education = remaining
    return await profiles.save(profile)
