from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, TypeVar

from sqlalchemy import String, and_, cast, func, or_, select
from sqlalchemy.orm import Session

from hirenet.db.base import Base
from hirenet.db.models import (
    Category,
    City,
    Company,
    Connection,
    Country,
    Group,
    GroupMembership,
    Job,
    JobApplication,
    Message,
    State,
    User,
    Vendor,
)
from hirenet.types import GroupRole

ModelT = TypeVar("ModelT", bound=Base)


def like_pattern(query: str) -> str:
    escaped = query.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass(slots=True)
class JobFilters:
    job_type: str | None = None
    experience_level: str | None = None
    location: str | None = None
    company_id: int | None = None


@dataclass(slots=True)
class Conversation:
    other_user: User
    last_message: Message
    unread_count: int


class Repository:
    def __init__(self, session: Session):
        self.session = session

    def _save(self, obj: ModelT) -> ModelT:
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def _apply(self, obj: ModelT, values: dict[str, Any]) -> ModelT:
        for key, value in values.items():
            setattr(obj, key, value)
        return self._save(obj)

    def delete(self, obj: Base) -> None:
        self.session.delete(obj)
        self.session.commit()

    # users and profile sections

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        user_type: str = "job_seeker",
        first_name: str = "",
        last_name: str = "",
    ) -> User:
        user = User(
            email=email.strip().lower(),
            password_hash=password_hash,
            user_type=user_type,
            first_name=first_name,
            last_name=last_name,
        )
        return self._save(user)

    def get_user(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        return self.session.scalar(select(User).where(User.email == email.strip().lower()))

    def update_user(self, user: User, values: dict[str, Any]) -> User:
        return self._apply(user, values)

    def count_users(self) -> int:
        return self.session.scalar(select(func.count(User.id))) or 0

    def list_user_items(self, model: type[ModelT], user_id: str) -> list[ModelT]:
        statement = select(model).where(model.user_id == user_id).order_by(model.id.desc())
        return list(self.session.scalars(statement).all())

    def add_user_item(self, model: type[ModelT], user_id: str, values: dict[str, Any]) -> ModelT:
        return self._save(model(user_id=user_id, **values))

    def get_item(self, model: type[ModelT], item_id: int) -> ModelT | None:
        return self.session.get(model, item_id)

    def update_item(self, obj: ModelT, values: dict[str, Any]) -> ModelT:
        return self._apply(obj, values)

    # companies

    def create_company(self, *, user_id: str, values: dict[str, Any]) -> Company:
        company = Company(user_id=user_id, status="pending", **values)
        return self._save(company)

    def get_company(self, company_id: int) -> Company | None:
        return self.session.get(Company, company_id)

    def list_companies(self, limit: int, status: str | None = "approved") -> list[Company]:
        statement = select(Company)
        if status is not None:
            statement = statement.where(Company.status == status)
        statement = statement.order_by(Company.name.asc(), Company.id.asc()).limit(limit)
        return list(self.session.scalars(statement).all())

    def search_companies(self, query: str, limit: int) -> list[Company]:
        pattern = like_pattern(query)
        statement = (
            select(Company)
            .where(
                and_(
                    Company.status == "approved",
                    or_(
                        Company.name.ilike(pattern, escape="\\"),
                        Company.industry.ilike(pattern, escape="\\"),
                        Company.description.ilike(pattern, escape="\\"),
                    ),
                )
            )
            .order_by(Company.name.asc(), Company.id.asc())
            .limit(limit)
        )
        return list(self.session.scalars(statement).all())

    def list_pending_companies(self) -> list[Company]:
        statement = select(Company).where(Company.status == "pending").order_by(Company.created_at.asc())
        return list(self.session.scalars(statement).all())

    def update_company(self, company: Company, values: dict[str, Any]) -> Company:
        return self._apply(company, values)

    def set_company_status(self, company: Company, status: str, actor_id: str) -> Company:
        if company.status == status:
            return company
        company.status = status
        company.approved_by = actor_id
        company.approved_at = datetime.now(UTC) if status == "approved" else None
        return self._save(company)

    def count_companies(self, status: str | None = None) -> int:
        statement = select(func.count(Company.id))
        if status is not None:
            statement = statement.where(Company.status == status)
        return self.session.scalar(statement) or 0

    # jobs

    def create_job(self, values: dict[str, Any]) -> Job:
        return self._save(Job(**values))

    def get_job(self, job_id: int) -> Job | None:
        return self.session.get(Job, job_id)

    def _job_statement(self, filters: JobFilters | None):
        statement = select(Job).where(Job.is_active.is_(True))
        if filters is None:
            return statement
        if filters.job_type:
            statement = statement.where(Job.job_type == filters.job_type)
        if filters.experience_level:
            statement = statement.where(Job.experience_level == filters.experience_level)
        if filters.location:
            statement = statement.where(Job.location.ilike(like_pattern(filters.location), escape="\\"))
        if filters.company_id is not None:
            statement = statement.where(Job.company_id == filters.company_id)
        return statement

    def list_jobs(self, filters: JobFilters | None = None, limit: int = 50) -> list[Job]:
        statement = self._job_statement(filters).order_by(Job.created_at.desc(), Job.id.desc()).limit(limit)
        return list(self.session.scalars(statement).unique().all())

    def search_jobs(self, query: str, filters: JobFilters | None = None, limit: int = 50) -> list[Job]:
        pattern = like_pattern(query)
        statement = (
            self._job_statement(filters)
            .where(
                or_(
                    Job.title.ilike(pattern, escape="\\"),
                    Job.description.ilike(pattern, escape="\\"),
                    Job.requirements.ilike(pattern, escape="\\"),
                    Job.location.ilike(pattern, escape="\\"),
                    cast(Job.skills, String).ilike(pattern, escape="\\"),
                )
            )
            .order_by(Job.created_at.desc(), Job.id.desc())
            .limit(limit)
        )
        return list(self.session.scalars(statement).unique().all())

    def list_company_jobs(self, company_id: int, *, active_only: bool = True) -> list[Job]:
        statement = select(Job).where(Job.company_id == company_id)
        if active_only:
            statement = statement.where(Job.is_active.is_(True))
        statement = statement.order_by(Job.created_at.desc(), Job.id.desc())
        return list(self.session.scalars(statement).unique().all())

    def update_job(self, job: Job, values: dict[str, Any]) -> Job:
        return self._apply(job, values)

    def count_active_jobs(self) -> int:
        return self.session.scalar(select(func.count(Job.id)).where(Job.is_active.is_(True))) or 0

    # applications

    def create_application(
        self,
        *,
        job_id: int,
        applicant_id: str,
        cover_letter: str = "",
        resume_url: str | None = None,
    ) -> JobApplication:
        application = JobApplication(
            job_id=job_id,
            applicant_id=applicant_id,
            cover_letter=cover_letter,
            resume_url=resume_url,
            status="submitted",
        )
        return self._save(application)

    def get_application(self, application_id: int) -> JobApplication | None:
        return self.session.get(JobApplication, application_id)

    def find_application(self, job_id: int, applicant_id: str) -> JobApplication | None:
        statement = select(JobApplication).where(
            and_(JobApplication.job_id == job_id, JobApplication.applicant_id == applicant_id)
        )
        return self.session.scalar(statement)

    def list_user_applications(self, applicant_id: str) -> list[JobApplication]:
        statement = (
            select(JobApplication)
            .where(JobApplication.applicant_id == applicant_id)
            .order_by(JobApplication.created_at.desc(), JobApplication.id.desc())
        )
        return list(self.session.scalars(statement).all())

    def list_job_applications(self, job_id: int) -> list[JobApplication]:
        statement = (
            select(JobApplication)
            .where(JobApplication.job_id == job_id)
            .order_by(JobApplication.created_at.asc(), JobApplication.id.asc())
        )
        return list(self.session.scalars(statement).all())

    def set_application_status(self, application: JobApplication, status: str) -> JobApplication:
        return self._apply(application, {"status": status})

    def count_applications(self) -> int:
        return self.session.scalar(select(func.count(JobApplication.id))) or 0

    # connections

    def create_connection(self, requester_id: str, addressee_id: str) -> Connection:
        return self._save(Connection(requester_id=requester_id, addressee_id=addressee_id, status="pending"))

    def get_connection(self, connection_id: int) -> Connection | None:
        return self.session.get(Connection, connection_id)

    def find_connection_between(self, user_a: str, user_b: str) -> Connection | None:
        statement = select(Connection).where(
            or_(
                and_(Connection.requester_id == user_a, Connection.addressee_id == user_b),
                and_(Connection.requester_id == user_b, Connection.addressee_id == user_a),
            )
        )
        return self.session.scalar(statement)

    def list_connections(self, user_id: str) -> list[Connection]:
        statement = (
            select(Connection)
            .where(
                and_(
                    Connection.status == "accepted",
                    or_(Connection.requester_id == user_id, Connection.addressee_id == user_id),
                )
            )
            .order_by(Connection.updated_at.desc())
        )
        return list(self.session.scalars(statement).all())

    def list_connection_requests(self, user_id: str) -> list[Connection]:
        statement = (
            select(Connection)
            .where(and_(Connection.addressee_id == user_id, Connection.status == "pending"))
            .order_by(Connection.created_at.desc())
        )
        return list(self.session.scalars(statement).all())

    def set_connection_status(self, connection: Connection, status: str) -> Connection:
        return self._apply(connection, {"status": status})

    # messages

    def create_message(self, *, sender_id: str, receiver_id: str, content: str) -> Message:
        return self._save(Message(sender_id=sender_id, receiver_id=receiver_id, content=content))

    def get_message(self, message_id: int) -> Message | None:
        return self.session.get(Message, message_id)

    def list_thread(self, user_id: str, other_user_id: str) -> list[Message]:
        statement = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
                    and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        return list(self.session.scalars(statement).all())

    def list_conversations(self, user_id: str) -> list[Conversation]:
        statement = (
            select(Message)
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        latest: dict[str, Message] = {}
        unread: dict[str, int] = {}
        for message in self.session.scalars(statement):
            other_id = message.receiver_id if message.sender_id == user_id else message.sender_id
            latest.setdefault(other_id, message)
            if message.receiver_id == user_id and not message.is_read:
                unread[other_id] = unread.get(other_id, 0) + 1

        conversations: list[Conversation] = []
        for other_id, message in latest.items():
            other = self.get_user(other_id)
            if other is None:
                continue
            conversations.append(
                Conversation(other_user=other, last_message=message, unread_count=unread.get(other_id, 0))
            )
        return conversations

    def mark_message_read(self, message: Message) -> Message:
        if message.is_read:
            return message
        return self._apply(message, {"is_read": True})

    # groups

    def create_group(self, *, created_by: str, values: dict[str, Any]) -> Group:
        group = Group(created_by=created_by, **values)
        self.session.add(group)
        self.session.flush()
        self.session.add(GroupMembership(group_id=group.id, user_id=created_by, role="admin"))
        self.session.commit()
        self.session.refresh(group)
        return group

    def get_group(self, group_id: int) -> Group | None:
        return self.session.get(Group, group_id)

    def list_groups(self, limit: int) -> list[Group]:
        statement = select(Group).where(Group.is_private.is_(False)).order_by(Group.created_at.desc()).limit(limit)
        return list(self.session.scalars(statement).all())

    def list_user_groups(self, user_id: str) -> list[Group]:
        statement = (
            select(Group)
            .join(GroupMembership, GroupMembership.group_id == Group.id)
            .where(GroupMembership.user_id == user_id)
            .order_by(Group.name.asc())
        )
        return list(self.session.scalars(statement).all())

    def join_group(self, group_id: int, user_id: str, role: GroupRole = "member") -> GroupMembership:
        existing = self.session.scalar(
            select(GroupMembership).where(
                and_(GroupMembership.group_id == group_id, GroupMembership.user_id == user_id)
            )
        )
        if existing:
            return existing
        return self._save(GroupMembership(group_id=group_id, user_id=user_id, role=role))

    # vendors

    def add_vendor(self, *, added_by: str, values: dict[str, Any]) -> Vendor:
        return self._save(Vendor(added_by=added_by, status="pending", **values))

    def get_vendor(self, vendor_id: int) -> Vendor | None:
        return self.session.get(Vendor, vendor_id)

    def list_company_vendors(self, company_id: int) -> list[Vendor]:
        statement = select(Vendor).where(Vendor.company_id == company_id).order_by(Vendor.name.asc())
        return list(self.session.scalars(statement).all())

    def list_pending_vendors(self) -> list[Vendor]:
        statement = select(Vendor).where(Vendor.status == "pending").order_by(Vendor.created_at.asc())
        return list(self.session.scalars(statement).all())

    def set_vendor_status(self, vendor: Vendor, status: str, actor_id: str) -> Vendor:
        if vendor.status == status:
            return vendor
        return self._apply(vendor, {"status": status, "approved_by": actor_id})

    # reference data

    def list_categories(self) -> list[Category]:
        return list(self.session.scalars(select(Category).order_by(Category.name.asc())).all())

    def get_category_by_name(self, name: str) -> Category | None:
        return self.session.scalar(select(Category).where(func.lower(Category.name) == name.strip().lower()))

    def create_category(self, name: str, description: str = "") -> Category:
        return self._save(Category(name=name.strip(), description=description))

    def list_countries(self) -> list[Country]:
        return list(self.session.scalars(select(Country).order_by(Country.name.asc())).all())

    def list_states(self, country_id: int) -> list[State]:
        statement = select(State).where(State.country_id == country_id).order_by(State.name.asc())
        return list(self.session.scalars(statement).all())

    def list_cities(self, state_id: int) -> list[City]:
        statement = select(City).where(City.state_id == state_id).order_by(City.name.asc())
        return list(self.session.scalars(statement).all())
