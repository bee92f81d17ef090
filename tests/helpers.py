"""Helpers compartidos por los tests de API."""


def auth(token: str) -> dict[str, str]:
    return {"x-auth-token": token}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


PROFILE = {
    "status": "Developer",
    "skills": "js, node , css",
    "company": "Acme",
    "website": "www.Example.com/me/",
    "location": "Lisbon",
    "bio": "hi",
    "githubusername": "janedoe",
    "twitter": "twitter.com/jane",
    "youtube": "",
}
