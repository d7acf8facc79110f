"""Message mappings for API responses."""

class Messages:
    """Centralized messages for API responses."""

    # Authentication messages
    AUTH = {
        "authentication_required": "Authentication required. Please sign in.",
        "invalid_credentials": "Could not validate credentials",
        "user_inactive": "User account is deactivated",
    }

    # Access control messages
    ACCESS = {
        "insufficient_role": "Access denied. Minimum role required: {required_role}. Your role: {user_role}",
    }

    # Summative scenario messages
    SCENARIO = {
        "not_found": "Summative scenario not found",
        "not_found_with_id": "Summative scenario {scenario_id} not found",
    }

    # Summative evaluation messages
    EVALUATION = {
        "not_found": "Summative evaluation not found",
        "not_found_with_id": "Summative evaluation {evaluation_id} not found",
        "deleted": "Summative evaluation deleted successfully",
        "max_students": "Maximum {max_students} students per evaluation",
        "student_already_added": "Student already in this evaluation",
        "student_removed": "Student removed from evaluation",
    }

    # Student messages
    STUDENT = {
        "not_found": "Student not found",
        "not_found_with_ids": "Students not found: {student_ids}",
    }

    # Score messages
    SCORE = {
        "not_found": "Score not found for this evaluation",
        "identifier_required": "Score ID or Student ID is required",
    }


def get_message(category: str, key: str, **kwargs) -> str:
    """Get a message from the specified category and format it with kwargs."""
    category_messages = getattr(Messages, category.upper(), {})
    message = category_messages.get(key, f"Message not found: {category}.{key}")
    return message.format(**kwargs) if kwargs else message
