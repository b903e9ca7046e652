"""
Admin panel (SQL backend only)
Access: http://localhost:8000/admin
Login: ADMIN_USERNAME / ADMIN_PASSWORD from .env
"""
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from .config import get_settings
from .models.booking import Booking
from .models.booking_page import BookingPage
from .models.form import Form
from .models.lead import Lead
from .models.quiz import Quiz

settings = get_settings()


class AdminAuth(AuthenticationBackend):
    """Session login with the configured credentials"""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        password = form.get("password")

        if username == settings.ADMIN_USERNAME and password == settings.ADMIN_PASSWORD:
            request.session.update({"authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get("authenticated", False)


# ==================== Model views ====================

class LeadAdmin(ModelView, model=Lead):
    name = "Lead"
    name_plural = "Leads"
    icon = "fa-solid fa-users"

    column_list = [
        Lead.name,
        Lead.email,
        Lead.phone,
        Lead.status,
        Lead.source,
        Lead.protection_state,
        Lead.created_at
    ]
    column_searchable_list = [Lead.name, Lead.email, Lead.phone]
    column_sortable_list = [Lead.created_at, Lead.status, Lead.name]
    column_default_sort = [(Lead.created_at, True)]

    column_labels = {
        "protection_state": "Assessment result",
        "pillar_scores": "Pillar scores",
        "quiz_answers": "Quiz answers",
        "form_data": "Form data",
        "created_at": "Created",
        "updated_at": "Updated"
    }


class BookingAdmin(ModelView, model=Booking):
    name = "Booking"
    name_plural = "Bookings"
    icon = "fa-solid fa-calendar-check"

    column_list = [
        Booking.scheduled_date,
        Booking.scheduled_time,
        Booking.client_name,
        Booking.client_email,
        Booking.booking_type,
        Booking.status
    ]
    column_searchable_list = [Booking.client_name, Booking.client_email]
    column_sortable_list = [Booking.scheduled_date, Booking.status, Booking.created_at]
    column_default_sort = [(Booking.scheduled_date, False), (Booking.scheduled_time, False)]

    column_labels = {
        "scheduled_date": "Date",
        "scheduled_time": "Time",
        "client_name": "Client",
        "client_email": "Email",
        "client_phone": "Phone",
        "booking_type": "Type",
        "booking_page_id": "Booking page"
    }


class FormAdmin(ModelView, model=Form):
    name = "Form"
    name_plural = "Forms"
    icon = "fa-solid fa-clipboard-list"

    column_list = [Form.name, Form.slug, Form.status, Form.created_at]
    column_searchable_list = [Form.name, Form.slug]


class QuizAdmin(ModelView, model=Quiz):
    name = "Quiz"
    name_plural = "Quizzes"
    icon = "fa-solid fa-list-check"

    column_list = [Quiz.name, Quiz.slug, Quiz.status, Quiz.created_at]
    column_searchable_list = [Quiz.name, Quiz.slug]


class BookingPageAdmin(ModelView, model=BookingPage):
    name = "Booking page"
    name_plural = "Booking pages"
    icon = "fa-solid fa-calendar"

    column_list = [BookingPage.name, BookingPage.slug, BookingPage.duration, BookingPage.status]
    column_searchable_list = [BookingPage.name, BookingPage.slug]


def setup_admin(app, engine):
    """Mount the admin panel"""
    authentication_backend = AdminAuth(secret_key=settings.SECRET_KEY)

    admin = Admin(
        app,
        engine,
        authentication_backend=authentication_backend,
        title="FinanceKeem Admin",
        base_url="/admin"
    )

    admin.add_view(LeadAdmin)
    admin.add_view(BookingAdmin)
    admin.add_view(FormAdmin)
    admin.add_view(QuizAdmin)
    admin.add_view(BookingPageAdmin)

    return admin
