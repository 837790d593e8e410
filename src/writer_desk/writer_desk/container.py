from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import generate_password_hash

from .achievements.mysql_achievement_repository import MySQLAchievementRepository
from .achievements.repository import AchievementRepository
from .achievements.service import AchievementService
from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.service import AssignmentService
from .auth.service import AuthService
from .core.constants import DEFAULT_WRITER_SESSION_DAYS
from .dashboard.service import WriterDashboardService
from .database.connection import DBConfig, DatabaseConnection
from .maintenance.duplicate_resolver import DuplicateResolver
from .stats.reconciler import WriterStatsReconciler
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .transfer.service import DataTransferService
from .writers.mysql_writer_repository import MySQLWriterRepository
from .writers.repository import WriterRepository
from .writers.service import WriterService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    writers_repo: WriterRepository
    assignments_repo: AssignmentRepository
    achievements_repo: AchievementRepository

    reconciler: WriterStatsReconciler
    auth_service: AuthService
    student_service: StudentService
    writer_service: WriterService
    assignment_service: AssignmentService
    achievement_service: AchievementService
    dashboard_service: WriterDashboardService
    transfer_service: DataTransferService
    duplicate_resolver: DuplicateResolver


def assemble(
    *,
    conn: Optional[DatabaseConnection],
    students_repo: StudentRepository,
    writers_repo: WriterRepository,
    assignments_repo: AssignmentRepository,
    achievements_repo: AchievementRepository,
    admin_password: str,
    writer_session_days: int = DEFAULT_WRITER_SESSION_DAYS,
    reconcile_previous_writer: bool = False,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, fakes in tests)."""

    reconciler = WriterStatsReconciler(
        assignments_repo,
        writers_repo,
        reconcile_previous_writer=reconcile_previous_writer,
    )
    writer_service = WriterService(writers_repo)

    return Container(
        conn=conn,
        students_repo=students_repo,
        writers_repo=writers_repo,
        assignments_repo=assignments_repo,
        achievements_repo=achievements_repo,
        reconciler=reconciler,
        auth_service=AuthService(
            writers_repo,
            admin_password_hash=generate_password_hash(admin_password),
            writer_session_days=writer_session_days,
        ),
        student_service=StudentService(students_repo, assignments_repo, reconciler),
        writer_service=writer_service,
        assignment_service=AssignmentService(assignments_repo, students_repo, writers_repo, reconciler),
        achievement_service=AchievementService(achievements_repo, writers_repo),
        dashboard_service=WriterDashboardService(writers_repo, assignments_repo, achievements_repo),
        transfer_service=DataTransferService(
            students_repo,
            writers_repo,
            assignments_repo,
            achievements_repo,
            reconciler,
            writer_service,
        ),
        duplicate_resolver=DuplicateResolver(assignments_repo, reconciler),
    )


def build_container(
    *,
    db_config: dict,
    admin_password: str,
    writer_session_days: int = DEFAULT_WRITER_SESSION_DAYS,
    reconcile_previous_writer: bool = False,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return assemble(
        conn=conn,
        students_repo=MySQLStudentRepository(conn),
        writers_repo=MySQLWriterRepository(conn),
        assignments_repo=MySQLAssignmentRepository(conn),
        achievements_repo=MySQLAchievementRepository(conn),
        admin_password=admin_password,
        writer_session_days=writer_session_days,
        reconcile_previous_writer=reconcile_previous_writer,
    )
