# nhostcli

Building blocks for working with a hosted backend project from Python:

- `nhostcli.client.Client`: an HTTP client for the auth service with
  `login` (email and password), `login_pat` (personal access token),
  `create_pat`, `refresh_token` and `verify_email`. Sessions and credentials
  come back as `nhostcli.credentials.Session` and
  `nhostcli.credentials.Credentials`.
- `nhostcli.request.make_json_request`: sends a JSON body, runs an optional
  response validator and returns the decoded JSON reply. Each attempt carries
  an `X-Request-Attempt` header. A rejected response raises
  `RequestValidationError`; error bodies from the auth service become
  `RequestError`.
- `nhostcli.retryer.BasicRetryer(max_attempts, multiplier)`: calls an
  operation with the attempt number until it returns, sleeping
  `attempt - multiplier` seconds (never less than zero) before each retry,
  and re-raises the last error.
- `nhostcli.env`: `unmarshal` reads a TOML secrets file into a list of
  `Secret(name, value)`, `marshal` writes secrets back as TOML with sorted
  keys, and `default_secrets` gives the secrets of a new local project.
- `nhostcli.ingress`: Traefik labels for containers (`Ingress`, `Rewrite`,
  `ingress_labels`, `traefik_host_match`) and local service URLs (`url`).
- `nhostcli.dockercompose.DockerCompose`: writes a compose file as YAML and
  runs `docker compose` (`start`, `stop`, `logs`, `wrapper`) and the Hasura
  CLI inside the `console` service (`apply_metadata`, `reload_metadata`,
  `apply_migrations`, `apply_seeds`). Failures raise `DockerComposeError`.
- `nhostcli.software`: `get_releases` lists published releases; `Manager`
  keeps the non-prerelease releases newer than a given version, returns the
  first of them with `latest_release`, and `download_asset` extracts the
  first file of a `.tar.gz` asset into a binary file object.
- `nhostcli.system.add_to_gitignore`: appends a line to `.gitignore` (or a
  given path) unless that text already occurs in it.

## Installation

```
pip install nhostcli
```

`DockerCompose` needs the `docker` command with the compose plugin on your
`PATH`. The metadata reload, migration and seed methods run on a pseudo
terminal and therefore work on POSIX systems only.

## Examples

Sign in and create a personal access token:

```python
from nhostcli.client import Client

client = Client("https://auth.example.com/v1")
password = "password"
session = client.login("user@example.com", password)
credentials = client.create_pat(session.access_token)
print(credentials.id)
```

Read and write a secrets file:

```python
from nhostcli.env import default_secrets, marshal, unmarshal

secrets = unmarshal(b"HASURA_GRAPHQL_ADMIN_SECRET = 'secret'\n")
with open(".secrets", "wb") as fh:
    fh.write(marshal(default_secrets()))
```

Build Traefik labels for a service:

```python
from nhostcli.ingress import Ingress, Rewrite, ingress_labels, traefik_host_match, url

labels = ingress_labels([
    Ingress(
        name="auth",
        tls=False,
        rule=traefik_host_match("auth"),
        port=4000,
        rewrite=Rewrite(regex="/v1(/|$$)(.*)", replacement="/$$2"),
    ),
])
print(url("dev", "auth", 1337, False))  # http://dev.auth.local.nhost.run:1337
```

Drive docker compose:

```python
from nhostcli.dockercompose import DockerCompose

dc = DockerCompose(".", ".nhost/docker-compose.yaml", "myproject")
dc.write_compose_file({"services": {}})
dc.start()
dc.logs("--tail", "20")
dc.stop(volumes=True)
```

Check for a newer release:

```python
from nhostcli.software import Manager, SoftwareError

manager = Manager()
try:
    release = manager.latest_release("v1.0.0")
    print(release.tag_name)
except SoftwareError:
    print("no newer release")
```

## What this package does not do

- It installs no command-line program; everything is used from Python.
- It does not build the service definitions of a compose file (database,
  GraphQL engine, auth, storage and so on). `DockerCompose.write_compose_file`
  writes whatever mapping you give it, and `nhostcli.ingress` only produces
  the routing labels.
- The client covers the auth endpoints only; it has no GraphQL API client
  and no sign-out call.

## Running the tests

```
pip install -e ".[test]"
pytest
```