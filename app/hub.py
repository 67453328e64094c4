"""
Real-time notification hub.

Clients connect to /hubs/notifications?access_token=<jwt>. Each connection
joins the groups user_{id} and role_{role} for the roles in its token, and
may join or leave extra groups with:

    {"action": "JoinGroup", "group": "branch_NEIVA"}
    {"action": "LeaveGroup", "group": "branch_NEIVA"}

user_* and role_* groups are reserved: a connection may only be in its own
user group and the role groups its token grants.

Server pushes are sent as:

    {"event": "ReceiveNotification", "data": {...}}
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from .security_utils import CLAIM_ROLE, CLAIM_USER_ID, claim_list, decode_access_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["hub"])

RECEIVE_NOTIFICATION = "ReceiveNotification"
USER_GROUP_PREFIX = "user_"
ROLE_GROUP_PREFIX = "role_"


def user_group(user_id: Any) -> str:
    return f"{USER_GROUP_PREFIX}{user_id}"


def role_group(role: str) -> str:
    return f"{ROLE_GROUP_PREFIX}{role}"


@dataclass
class HubConnection:
    """A connected WebSocket client"""

    websocket: WebSocket
    user_id: str
    roles: set[str] = field(default_factory=set)
    groups: set[str] = field(default_factory=set)
    connected_at: datetime = field(default_factory=datetime.utcnow)


class NotificationHub:
    """Tracks connections and group membership and fans messages out to groups"""

    def __init__(self):
        self.connections: dict[str, HubConnection] = {}
        self.groups: dict[str, set[str]] = {}

    async def connect(self, websocket: WebSocket, user_id: str, roles: list[str]) -> str:
        await websocket.accept()
        connection_id = str(uuid.uuid4())
        self.connections[connection_id] = HubConnection(websocket=websocket, user_id=user_id, roles=set(roles))

        self.join_group(connection_id, user_group(user_id))
        for role in roles:
            self.join_group(connection_id, role_group(role))

        logger.info(
            f"🔌 Hub connection {connection_id} for user {user_id}, total: {len(self.connections)}"
        )
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        connection = self.connections.pop(connection_id, None)
        if not connection:
            return
        for group in list(connection.groups):
            members = self.groups.get(group)
            if members is not None:
                members.discard(connection_id)
                if not members:
                    del self.groups[group]
        logger.info(f"🔌 Hub connection {connection_id} closed, remaining: {len(self.connections)}")

    def can_join(self, connection_id: str, group: str) -> bool:
        """Reserved groups only admit their owner or holders of the role"""
        connection = self.connections.get(connection_id)
        if not connection or not group:
            return False
        if group.startswith(USER_GROUP_PREFIX):
            return group == user_group(connection.user_id)
        if group.startswith(ROLE_GROUP_PREFIX):
            return group[len(ROLE_GROUP_PREFIX):] in connection.roles
        return True

    def join_group(self, connection_id: str, group: str) -> None:
        connection = self.connections.get(connection_id)
        if not connection or not group:
            return
        self.groups.setdefault(group, set()).add(connection_id)
        connection.groups.add(group)

    def leave_group(self, connection_id: str, group: str) -> None:
        connection = self.connections.get(connection_id)
        if connection:
            connection.groups.discard(group)
        members = self.groups.get(group)
        if members is not None:
            members.discard(connection_id)
            if not members:
                del self.groups[group]

    async def send_to_group(self, group: str, data: dict) -> int:
        """Send a ReceiveNotification event to every member; returns deliveries"""
        members = list(self.groups.get(group, ()))
        if not members:
            logger.debug(f"No hub connections in group {group}")
            return 0

        message = {"event": RECEIVE_NOTIFICATION, "data": data}
        delivered = 0
        for connection_id in members:
            connection = self.connections.get(connection_id)
            if not connection:
                continue
            try:
                await connection.websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"⚠️ Failed to push to hub connection {connection_id}: {e}")
                self.disconnect(connection_id)
        return delivered

    async def send_to_all(self, data: dict) -> int:
        message = {"event": RECEIVE_NOTIFICATION, "data": data}
        delivered = 0
        for connection_id, connection in list(self.connections.items()):
            try:
                await connection.websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"⚠️ Failed to push to hub connection {connection_id}: {e}")
                self.disconnect(connection_id)
        return delivered


# Singleton hub instance
hub = NotificationHub()


async def send_notification_to_user(user_id: Any, data: dict) -> int:
    return await hub.send_to_group(user_group(user_id), data)


async def send_notification_to_role(role: str, data: dict) -> int:
    return await hub.send_to_group(role_group(role), data)


async def send_notification_to_all(data: dict) -> int:
    return await hub.send_to_all(data)


@router.websocket("/hubs/notifications")
async def notifications_hub(
    websocket: WebSocket,
    access_token: Optional[str] = Query(default=None),
):
    payload = decode_access_token(access_token) if access_token else None
    user_id = payload.get(CLAIM_USER_ID) if payload else None
    if not user_id:
        logger.warning("⚠️ Anonymous hub connection rejected")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    connection_id = await hub.connect(websocket, str(user_id), claim_list(payload, CLAIM_ROLE))
    try:
        while True:
            message = await websocket.receive_json()
            action = message.get("action")
            group = message.get("group")

            if action == "JoinGroup" and group:
                if not hub.can_join(connection_id, group):
                    logger.warning(f"⚠️ Connection {connection_id} (user {user_id}) refused group {group}")
                    continue
                hub.join_group(connection_id, group)
                logger.info(f"➕ Connection {connection_id} joined group {group}")
            elif action == "LeaveGroup" and group:
                hub.leave_group(connection_id, group)
                logger.info(f"➖ Connection {connection_id} left group {group}")
            elif action == "ping":
                await websocket.send_json({"event": "pong", "timestamp": datetime.utcnow().isoformat()})
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"❌ Hub connection {connection_id} error: {e}")
    finally:
        hub.disconnect(connection_id)
