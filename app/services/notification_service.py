"""
Best-effort outbound email.

Services build ``EmailNotification`` objects; routers hand them to
``dispatch`` through FastAPI background tasks so delivery happens after the
response is sent. A failed send is logged and never reaches the caller.
"""
from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from html import escape
from typing import Iterable

from app.core.config import settings

logger = logging.getLogger(__name__)

SIGNATURE = "<p>Best regards,<br>The Project Portal Team</p>"


@dataclass(frozen=True)
class EmailNotification:
    to: str
    subject: str
    html: str


def send_email(to: str, subject: str, html: str) -> None:
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.SMTP_FROM
    msg["To"] = to
    msg.set_content("This message requires an HTML capable mail client.")
    msg.add_alternative(html, subtype="html")

    if not settings.SMTP_HOST:
        logger.info("SMTP not configured; email to %s not sent (subject=%r)", to, subject)
        return

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as server:
        server.starttls()
        if settings.SMTP_USER and settings.SMTP_PASS:
            server.login(settings.SMTP_USER, settings.SMTP_PASS)
        server.send_message(msg)
    logger.info("Email sent to %s: %s", to, subject)


def dispatch(notifications: Iterable[EmailNotification]) -> None:
    for note in notifications:
        try:
            send_email(note.to, note.subject, note.html)
        except Exception:
            logger.exception("Failed to send email to %s (subject=%r)", note.to, note.subject)


# -------------------------
# Templates
# -------------------------
def student_welcome(email: str, password: str) -> EmailNotification:
    return EmailNotification(
        to=email,
        subject="Welcome to the Real Time Project Portal!",
        html=(
            "<p>Dear Student,</p>"
            "<p>You have been successfully registered on the Real Time Project Portal.</p>"
            f"<p>Your auto-generated password is: <strong>{escape(password)}</strong></p>"
            "<p>Please log in and you can change your password in your profile section.</p>"
            + SIGNATURE
        ),
    )


def mentor_welcome(email: str, password: str) -> EmailNotification:
    return EmailNotification(
        to=email,
        subject="Welcome to the Project Portal (Mentor)!",
        html=(
            "<p>Dear Mentor,</p>"
            "<p>You have been registered as a mentor on the Real Time Project Portal.</p>"
            f"<p>Your auto-generated password is: <strong>{escape(password)}</strong></p>"
            "<p>Please log in and you can change your password in your profile section.</p>"
            + SIGNATURE
        ),
    )


def mentor_assigned(mentor, project) -> EmailNotification:
    return EmailNotification(
        to=mentor.email,
        subject=f'You have been assigned to project "{project.title}"',
        html=(
            f"<p>Dear {escape(mentor.name)},</p>"
            f'<p>You have been assigned as the mentor for the project "{escape(project.title)}".</p>'
            "<p>Please log in to the portal for further details and to view student applications.</p>"
            + SIGNATURE
        ),
    )


def mentor_unassigned(mentor, project) -> EmailNotification:
    return EmailNotification(
        to=mentor.email,
        subject=f'You have been unassigned from project "{project.title}"',
        html=(
            f"<p>Dear {escape(mentor.name)},</p>"
            f'<p>You have been unassigned as the mentor for the project "{escape(project.title)}".</p>'
            + SIGNATURE
        ),
    )


def project_approved(student, project) -> EmailNotification:
    return EmailNotification(
        to=student.email,
        subject=f'Project "{project.title}" Approved!',
        html=(
            f"<p>Dear {escape(student.name)},</p>"
            f'<p>Your application for the project "{escape(project.title)}" has been approved.</p>'
            "<p>Please log in to the portal for further details.</p>"
            + SIGNATURE
        ),
    )


def project_rejected(student, project) -> EmailNotification:
    return EmailNotification(
        to=student.email,
        subject=f'Project "{project.title}" Rejected',
        html=(
            f"<p>Dear {escape(student.name)},</p>"
            f'<p>Your application for the project "{escape(project.title)}" has been rejected.</p>'
            "<p>Please check other available projects on the project portal.</p>"
            + SIGNATURE
        ),
    )
