from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from hirenet.api.deps import EntityId, cap_limit, get_app_settings, get_current_user, get_db
from hirenet.api.errors import handle_failures
from hirenet.api.schemas import (
    ConnectionCreate,
    ConnectionResponse,
    ConnectionStatusRequest,
    ConversationResponse,
    GroupCreate,
    GroupResponse,
    MessageCreate,
    MessageResponse,
    StatusMessage,
    UserSummary,
)
from hirenet.config import Settings
from hirenet.db.models import User
from hirenet.db.repositories import Repository

router = APIRouter(prefix="/api", tags=["network"])


# connections


@router.get("/connections", response_model=list[ConnectionResponse])
def list_connections(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> list[ConnectionResponse]:
    with handle_failures("Failed to fetch connections"):
        rows = Repository(db).list_connections(user.id)
    return [ConnectionResponse.model_validate(row) for row in rows]


@router.get("/connection-requests", response_model=list[ConnectionResponse])
def list_connection_requests(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ConnectionResponse]:
    with handle_failures("Failed to fetch connection requests"):
        rows = Repository(db).list_connection_requests(user.id)
    return [ConnectionResponse.model_validate(row) for row in rows]


@router.post("/connections", response_model=ConnectionResponse)
def create_connection(
    payload: ConnectionCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ConnectionResponse:
    if payload.addressee_id == user.id:
        raise HTTPException(status_code=400, detail="You cannot connect with yourself")

    repo = Repository(db)
    with handle_failures("Failed to create connection"):
        if repo.get_user(payload.addressee_id) is None:
            raise HTTPException(status_code=404, detail="User not found")
        if repo.find_connection_between(user.id, payload.addressee_id):
            raise HTTPException(status_code=400, detail="A connection with this user already exists")
        row = repo.create_connection(user.id, payload.addressee_id)
    return ConnectionResponse.model_validate(row)


@router.put("/connections/{connection_id}/status", response_model=ConnectionResponse)
def update_connection_status(
    connection_id: EntityId,
    payload: ConnectionStatusRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ConnectionResponse:
    repo = Repository(db)
    with handle_failures("Failed to update connection status"):
        connection = repo.get_connection(connection_id)
        if connection is None:
            raise HTTPException(status_code=404, detail="Connection not found")
        if connection.addressee_id != user.id:
            raise HTTPException(status_code=403, detail="Only the invited user can respond to a connection request")
        connection = repo.set_connection_status(connection, payload.status)
    return ConnectionResponse.model_validate(connection)


# messages


@router.get("/conversations", response_model=list[ConversationResponse])
def list_conversations(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ConversationResponse]:
    with handle_failures("Failed to fetch conversations"):
        conversations = Repository(db).list_conversations(user.id)
        return [
            ConversationResponse(
                user=UserSummary.model_validate(item.other_user),
                last_message=MessageResponse.model_validate(item.last_message),
                unread_count=item.unread_count,
            )
            for item in conversations
        ]


@router.get("/messages/{user_id}", response_model=list[MessageResponse])
def list_messages(
    user_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[MessageResponse]:
    with handle_failures("Failed to fetch messages"):
        rows = Repository(db).list_thread(user.id, user_id)
    return [MessageResponse.model_validate(row) for row in rows]


@router.post("/messages", response_model=MessageResponse)
def send_message(
    payload: MessageCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    repo = Repository(db)
    with handle_failures("Failed to create message"):
        if repo.get_user(payload.receiver_id) is None:
            raise HTTPException(status_code=404, detail="Recipient not found")
        row = repo.create_message(sender_id=user.id, receiver_id=payload.receiver_id, content=payload.content)
    return MessageResponse.model_validate(row)


@router.put("/messages/{message_id}/read", response_model=MessageResponse)
def mark_message_read(
    message_id: EntityId,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    repo = Repository(db)
    with handle_failures("Failed to mark message as read"):
        message = repo.get_message(message_id)
        if message is None:
            raise HTTPException(status_code=404, detail="Message not found")
        if message.receiver_id != user.id:
            raise HTTPException(status_code=403, detail="Only the recipient can mark a message as read")
        message = repo.mark_message_read(message)
    return MessageResponse.model_validate(message)


# groups


@router.get("/groups", response_model=list[GroupResponse])
def list_groups(
    limit: int | None = Query(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> list[GroupResponse]:
    cap = cap_limit(limit, settings.group_list_default_limit, settings.group_list_max_limit)
    with handle_failures("Failed to fetch groups"):
        rows = Repository(db).list_groups(cap)
    return [GroupResponse.model_validate(row) for row in rows]


@router.get("/user/groups", response_model=list[GroupResponse])
def list_user_groups(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> list[GroupResponse]:
    with handle_failures("Failed to fetch user groups"):
        rows = Repository(db).list_user_groups(user.id)
    return [GroupResponse.model_validate(row) for row in rows]


@router.post("/groups", response_model=GroupResponse)
def create_group(
    payload: GroupCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> GroupResponse:
    with handle_failures("Failed to create group"):
        group = Repository(db).create_group(created_by=user.id, values=payload.model_dump())
    return GroupResponse.model_validate(group)


@router.post("/groups/{group_id}/join", response_model=StatusMessage)
def join_group(
    group_id: EntityId,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StatusMessage:
    repo = Repository(db)
    with handle_failures("Failed to join group"):
        if repo.get_group(group_id) is None:
            raise HTTPException(status_code=404, detail="Group not found")
        repo.join_group(group_id, user.id)
    return StatusMessage(message="Successfully joined group")
