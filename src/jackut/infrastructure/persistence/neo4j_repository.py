"""Neo4j implementations of the snapshot repositories.
Graph: one (:JackutUser {login}) node per account; each entry of a relationship list
is a typed edge from the profile owner, ordered by its `position`:
(u)-[:FRIEND|PENDING_FRIEND|ENEMY|CRUSH|IDOL|FAN {position}]->(v).
Queues and attributes have no graph meaning and are stored as JSON strings on the node.
Communities are (:JackutCommunity {name}) nodes holding their ordered member logins.
"""

import json

from neo4j.exceptions import DriverError, Neo4jError

from jackut.application.ports import PersistenceError
from jackut.domain import Community, User
from jackut.infrastructure.snapshot import (
    community_from_dict,
    community_to_dict,
    user_from_dict,
    user_to_dict,
)

# Profile list -> relationship type. Types cannot be query parameters, so only these are used.
EDGE_TYPES = {
    "friends": "FRIEND",
    "pending_friends": "PENDING_FRIEND",
    "enemies": "ENEMY",
    "crushes": "CRUSH",
    "idols": "IDOL",
    "fans": "FAN",
}

_USER_CONSTRAINT_QUERY = """
CREATE CONSTRAINT jackut_user_login IF NOT EXISTS
FOR (u:JackutUser) REQUIRE u.login IS UNIQUE
"""

_COMMUNITY_CONSTRAINT_QUERY = """
CREATE CONSTRAINT jackut_community_name IF NOT EXISTS
FOR (c:JackutCommunity) REQUIRE c.name IS UNIQUE
"""

_DELETE_USERS_QUERY = "MATCH (u:JackutUser) DETACH DELETE u"

_CREATE_USERS_QUERY = """
UNWIND $rows AS row
CREATE (u:JackutUser {
    login: row.login,
    name: row.name,
    password: row.password,
    position: row.position,
    attributes: row.attributes,
    notes: row.notes,
    broadcasts: row.broadcasts,
    member_of: row.member_of,
    owner_of: row.owner_of
})
"""

_CREATE_EDGES_QUERY = """
UNWIND $edges AS e
MATCH (a:JackutUser {{login: e.source}}), (b:JackutUser {{login: e.target}})
CREATE (a)-[:{rel_type} {{position: e.position}}]->(b)
"""

_LIST_USERS_QUERY = """
MATCH (u:JackutUser)
RETURN u
ORDER BY u.position
"""

_LIST_EDGES_QUERY = """
MATCH (a:JackutUser)-[r:{rel_type}]->(b:JackutUser)
RETURN a.login AS source, b.login AS target
ORDER BY a.login, r.position
"""

_DELETE_COMMUNITIES_QUERY = "MATCH (c:JackutCommunity) DETACH DELETE c"

_CREATE_COMMUNITIES_QUERY = """
UNWIND $rows AS row
CREATE (c:JackutCommunity {
    name: row.name,
    description: row.description,
    owner: row.owner,
    members: row.members,
    position: row.position
})
"""

_LIST_COMMUNITIES_QUERY = """
MATCH (c:JackutCommunity)
RETURN c
ORDER BY c.position
"""


def ensure_jackut_constraints(driver) -> None:
    """Create uniqueness constraints on user login and community name if missing."""
    with driver.session() as session:
        session.run(_USER_CONSTRAINT_QUERY)
        session.run(_COMMUNITY_CONSTRAINT_QUERY)


def _user_row(position: int, data: dict) -> dict:
    return {
        "login": data["login"],
        "name": data["name"],
        "password": data["password"],
        "position": position,
        "attributes": json.dumps(data["attributes"], ensure_ascii=False),
        "notes": json.dumps(data["notes"], ensure_ascii=False),
        "broadcasts": json.dumps(data["broadcasts"], ensure_ascii=False),
        "member_of": data["member_of"],
        "owner_of": data["owner_of"],
    }


def _row_to_user_dict(node) -> dict:
    return {
        "login": node["login"],
        "name": node.get("name") or "",
        "password": node.get("password") or "",
        "attributes": json.loads(node.get("attributes") or "{}"),
        "notes": json.loads(node.get("notes") or "[]"),
        "broadcasts": json.loads(node.get("broadcasts") or "[]"),
        "member_of": list(node.get("member_of") or []),
        "owner_of": list(node.get("owner_of") or []),
    }


class Neo4jUserRepository:
    """Stores the user snapshot in Neo4j. save_all replaces every JackutUser in one transaction."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def save_all(self, users: list[User]) -> None:
        records = [user_to_dict(u) for u in users]
        rows = [_user_row(i, data) for i, data in enumerate(records)]
        edges: dict[str, list[dict]] = {}
        for key, rel_type in EDGE_TYPES.items():
            edges[rel_type] = [
                {"source": data["login"], "target": target, "position": i}
                for data in records
                for i, target in enumerate(data[key])
            ]

        def replace(tx) -> None:
            tx.run(_DELETE_USERS_QUERY)
            tx.run(_CREATE_USERS_QUERY, rows=rows)
            for rel_type, rel_edges in edges.items():
                if rel_edges:
                    tx.run(_CREATE_EDGES_QUERY.format(rel_type=rel_type), edges=rel_edges)

        try:
            with self._driver.session() as session:
                session.execute_write(replace)
        except (DriverError, Neo4jError) as e:
            raise PersistenceError("Cannot save users to Neo4j") from e

    def load_all(self) -> list[User]:
        try:
            with self._driver.session() as session:
                result = session.run(_LIST_USERS_QUERY)
                by_login = {}
                for record in result:
                    data = _row_to_user_dict(record["u"])
                    by_login[data["login"]] = data
                for key, rel_type in EDGE_TYPES.items():
                    for data in by_login.values():
                        data[key] = []
                    result = session.run(_LIST_EDGES_QUERY.format(rel_type=rel_type))
                    for record in result:
                        source = by_login.get(record["source"])
                        if source is not None:
                            source[key].append(record["target"])
        except (DriverError, Neo4jError) as e:
            raise PersistenceError("Cannot load users from Neo4j") from e
        return [user_from_dict(data) for data in by_login.values()]


class Neo4jCommunityRepository:
    """Stores the community snapshot in Neo4j as JackutCommunity nodes."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def save_all(self, communities: list[Community]) -> None:
        rows = [
            {**community_to_dict(c), "position": i}
            for i, c in enumerate(communities)
        ]

        def replace(tx) -> None:
            tx.run(_DELETE_COMMUNITIES_QUERY)
            tx.run(_CREATE_COMMUNITIES_QUERY, rows=rows)

        try:
            with self._driver.session() as session:
                session.execute_write(replace)
        except (DriverError, Neo4jError) as e:
            raise PersistenceError("Cannot save communities to Neo4j") from e

    def load_all(self) -> list[Community]:
        try:
            with self._driver.session() as session:
                result = session.run(_LIST_COMMUNITIES_QUERY)
                rows = [dict(record["c"]) for record in result]
        except (DriverError, Neo4jError) as e:
            raise PersistenceError("Cannot load communities from Neo4j") from e
        return [community_from_dict(row) for row in rows]
