from project.ids import MAX_DB_ID, resolve_id

MAX_COURSE_ID = MAX_DB_ID


def resolve_course_id(value):
    return resolve_id(value, "Course not found")
