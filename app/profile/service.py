# app/profile/service.py
from __future__ import annotations
from typing import Any
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import FieldError
from app.profile.models import Profile
from app.profile.schemas import ProfileIn
from app.profile import repository as repo
from app.users.repository import get_by_id, get_many

SOCIAL_KEYS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def normalize_url(value: str) -> str:
    """
    Forma canónica HTTPS de una URL escrita por el usuario:
    "Example.com/me/" -> "https://example.com/me"

    - sin esquema o http:// -> https://
    - host en minúsculas, sin "www." ni puerto por defecto
    - sin "/" final, sin fragmento, query ordenada por clave

    ValueError si la URL no se puede parsear (p. ej. puerto no numérico).
    """
    raw = value.strip()
    if raw.startswith("//"):
        raw = "https:" + raw
    elif "://" not in raw:
        raw = "https://" + raw

    parts = urlsplit(raw)
    host = (parts.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]

    netloc = host
    if parts.port and parts.port not in (80, 443):
        netloc = f"{host}:{parts.port}"
    if parts.username:
        auth = parts.username + (f":{parts.password}" if parts.password else "")
        netloc = f"{auth}@{netloc}"

    path = parts.path.rstrip("/")
    query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)))
    return urlunsplit(("https", netloc, path, query, ""))


def split_skills(skills: str | list[str]) -> list[str]:
    """'js, node , css' -> ['js', 'node', 'css'] (las listas se respetan tal cual)."""
    if isinstance(skills, list):
        return skills
    return [s.strip() for s in skills.split(",") if s.strip()]


def _url_field(value: str | None, param: str) -> str | None:
    if not value:
        return value
    try:
        return normalize_url(value)
    except ValueError:
        raise FieldError("Please include a valid URL", param=param)


def build_profile_fields(data: ProfileIn) -> dict[str, Any]:
    social = {key: _url_field(getattr(data, key), key) for key in SOCIAL_KEYS}

    return {
        "company": data.company,
        "location": data.location,
        "website": _url_field(data.website, "website") or "",
        "bio": data.bio,
        "skills": split_skills(data.skills),
        "status": data.status,
        "githubusername": data.githubusername,
        "social": social,
    }


def _user_mini(user) -> dict | None:
    if not user:
        return None
    return {"id": user.id, "name": user.name, "avatar": user.avatar}


def _entry_dict(entry, fields: tuple[str, ...]) -> dict:
    out = {"id": entry.id}
    for f in fields:
        out[f] = getattr(entry, f)
    out["from"] = entry.from_date
    out["to"] = entry.to_date
    out["current"] = entry.current
    out["description"] = entry.description
    return out


async def hydrate_profile_out(
    db: AsyncSession, prof: Profile, *, user=None
) -> dict:
    """
    Dict que espera el front: perfil + user {id,name,avatar}
    + experience/education (más nuevos primero).
    """
    if user is None:
        user = await get_by_id(db, prof.user_id)

    experience = await repo.list_experience(db, prof.id)
    education = await repo.list_education(db, prof.id)

    return {
        "id": prof.id,
        "user": _user_mini(user),
        "company": prof.company,
        "website": prof.website,
        "location": prof.location,
        "status": prof.status,
        "skills": prof.skills or [],
        "bio": prof.bio,
        "githubusername": prof.githubusername,
        "social": prof.social or {},
        "experience": [_entry_dict(e, ("title", "company", "location")) for e in experience],
        "education": [_entry_dict(e, ("school", "degree", "fieldofstudy")) for e in education],
        "date": prof.date,
    }


async def hydrate_profiles(db: AsyncSession, profiles: list[Profile]) -> list[dict]:
    users = await get_many(db, [p.user_id for p in profiles])
    return [
        await hydrate_profile_out(db, p, user=users.get(p.user_id))
        for p in profiles
    ]
