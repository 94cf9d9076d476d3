from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .attendance.service import AttendanceService
from .auth.service import AuthService
from .database.connection import JsonFileConnection, StoreConfig
from .database.json_document_repository import JsonDocumentRepository
from .database.service import DataService
from .members.service import MemberService
from .reports.service import ReportService
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    conn: JsonFileConnection
    documents: JsonDocumentRepository

    member_service: MemberService
    session_service: SessionService
    attendance_service: AttendanceService
    report_service: ReportService
    data_service: DataService
    auth_service: AuthService


def build_container(*, data_config: dict, admin_password_hash: str) -> Container:
    config = StoreConfig(data_file=Path(str(data_config["data_file"])))
    conn = JsonFileConnection.get_instance(config)

    documents = JsonDocumentRepository(conn)

    return Container(
        conn=conn,
        documents=documents,
        member_service=MemberService(documents),
        session_service=SessionService(documents),
        attendance_service=AttendanceService(documents),
        report_service=ReportService(documents),
        data_service=DataService(documents),
        auth_service=AuthService(admin_password_hash),
    )
