ADMIN_EMAIL = "admin@forum.test"
ADMIN_PASSWORD = "admin-pass"
DEFAULT_PASSWORD = "secret1"


def register(client, username: str, email: str, password: str = DEFAULT_PASSWORD):
    return client.post(
        "/api/register",
        json={"username": username, "email": email, "password": password},
    )


def login(client, email: str, password: str = DEFAULT_PASSWORD):
    return client.post("/api/login", json={"email": email, "password": password})


def login_admin(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


def create_topic(client, title="Hi", content="Body", category="Новости", files=None):
    return client.post(
        "/api/topics",
        data={"title": title, "content": content, "category": category},
        files=files,
    )
