from models.record import Record, extract_record_id
from models.instructor import Instructor, InstructorFields
from models.room import Room, RoomFields
from models.participant import Participant, ParticipantFields
from models.course import Course, CourseFields, CourseStatus
from models.enrollment import Enrollment, EnrollmentFields
from models.snapshot import RecordSnapshot

__all__ = [
    "Record",
    "extract_record_id",
    "Instructor",
    "InstructorFields",
    "Room",
    "RoomFields",
    "Participant",
    "ParticipantFields",
    "Course",
    "CourseFields",
    "CourseStatus",
    "Enrollment",
    "EnrollmentFields",
    "RecordSnapshot",
]
