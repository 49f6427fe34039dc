"""
Operational errors raised by the services.

Every error is a rejected operation reported to the caller; none of them is
retried by the service layer. The app maps them to JSON responses using
``status_code`` and ``code``.
"""

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND


class HubError(Exception):
    status_code: int = HTTP_400_BAD_REQUEST
    code: str = "HubError"
    message: str = "Request could not be completed"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class CourseNotFound(HubError):
    status_code = HTTP_404_NOT_FOUND
    code = "CourseNotFound"
    message = "Course not found"


class CourseNotPublished(HubError):
    code = "CourseNotPublished"
    message = "Cannot enroll in unpublished course"


class AlreadyEnrolled(HubError):
    code = "AlreadyEnrolled"
    message = "Already enrolled in this course"


class NotEnrolled(HubError):
    code = "NotEnrolled"
    message = "Not enrolled in this course"


class LessonNotFound(HubError):
    status_code = HTTP_404_NOT_FOUND
    code = "LessonNotFound"
    message = "Lesson not found"


class QuestionNotFound(HubError):
    status_code = HTTP_404_NOT_FOUND
    code = "QuestionNotFound"
    message = "Quiz question not found"


class DuplicateLessonOrder(HubError):
    code = "DuplicateLessonOrder"
    message = "A lesson with this order already exists in the course"
