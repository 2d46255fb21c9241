from nhostcli.credentials import Credentials, Session


def test_credentials_from_dict():
    creds = Credentials.from_dict({"id": "abc", "personalAccessToken": "token"})
    assert creds == Credentials(id="abc", personal_access_token="token")


def test_credentials_missing_fields_default_empty():
    creds = Credentials.from_dict({})
    assert creds == Credentials()
    assert creds.id == ""


def test_session_from_dict():
    session = Session.from_dict(
        {"session": {"accessToken": "token", "accessTokenExpiresIn": 900, "refreshToken": "secret"}}
    )
    assert session.access_token == "token"
    assert session.access_token_expires_in == 900
    assert session.refresh_token == "secret"


def test_session_without_inner_object():
    session = Session.from_dict({"other": 1})
    assert session == Session()
    assert session.access_token_expires_in == 0