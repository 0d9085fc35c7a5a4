from typing import Any, Dict, List

REQUIRED_PATH_FIELDS = ["id", "name"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _validate_career_path(i: int, path: Any) -> List[str]:
    if not isinstance(path, dict):
        return [f"career_paths[{i}] must be an object"]
    errors: List[str] = []
    for f in REQUIRED_PATH_FIELDS:
        if f not in path:
            errors.append(f"career_paths[{i}]: missing required field: {f}")
        elif not _is_non_empty_str(path[f]):
            errors.append(f"career_paths[{i}]: field '{f}' must be a non-empty string")
    if "description" in path and not isinstance(path["description"], str):
        errors.append(f"career_paths[{i}]: field 'description' must be a string if provided")
    return errors


def _validate_attempt(where: str, attempt: Any) -> List[str]:
    if not isinstance(attempt, dict):
        return [f"{where} must be an object"]
    errors: List[str] = []
    if not isinstance(attempt.get("is_correct"), bool):
        errors.append(f"{where}: field 'is_correct' must be a boolean")
    category = attempt.get("category")
    if category is not None and not isinstance(category, str):
        errors.append(f"{where}: field 'category' must be a string or null")
    if "question_id" in attempt and not isinstance(attempt["question_id"], (str, int)):
        errors.append(f"{where}: field 'question_id' must be a string or integer")
    return errors


def _validate_answer(where: str, answer: Any) -> List[str]:
    if not isinstance(answer, dict):
        return [f"{where} must be an object"]
    errors: List[str] = []
    qid = answer.get("question_id")
    if not isinstance(qid, int) or isinstance(qid, bool):
        errors.append(f"{where}: field 'question_id' must be an integer")
    if not isinstance(answer.get("response"), (str, int)):
        errors.append(f"{where}: field 'response' must be a string")
    return errors


def validate_seed(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.

    Only checks structure. Questionnaire answer values are not checked;
    the recommender ignores what it does not recognise.
    """
    if not isinstance(data, dict):
        return ["Seed document must be a JSON object"]

    errors: List[str] = []

    paths = data.get("career_paths", [])
    if not isinstance(paths, list):
        errors.append("Field 'career_paths' must be a list")
    else:
        seen = set()
        for i, path in enumerate(paths):
            errors.extend(_validate_career_path(i, path))
            if isinstance(path, dict) and path.get("id") in seen:
                errors.append(f"career_paths[{i}]: duplicate id '{path['id']}'")
            if isinstance(path, dict):
                seen.add(path.get("id"))

    users = data.get("users", {})
    if not isinstance(users, dict):
        errors.append("Field 'users' must be an object keyed by user id")
        return errors

    for user_id, record in users.items():
        if not isinstance(record, dict):
            errors.append(f"users['{user_id}'] must be an object")
            continue
        attempts = record.get("attempts", [])
        answers = record.get("interest_answers", [])
        if not isinstance(attempts, list):
            errors.append(f"users['{user_id}']: field 'attempts' must be a list")
        else:
            for i, attempt in enumerate(attempts):
                errors.extend(_validate_attempt(f"users['{user_id}'].attempts[{i}]", attempt))
        if not isinstance(answers, list):
            errors.append(f"users['{user_id}']: field 'interest_answers' must be a list")
        else:
            for i, answer in enumerate(answers):
                errors.extend(_validate_answer(f"users['{user_id}'].interest_answers[{i}]", answer))

    return errors
