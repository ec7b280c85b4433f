from recrut_core.errors import ApiError, MissingOrganizationError, extract_error_message, message_for


def test_extract_message_string():
    assert extract_error_message({"message": "Email déjà utilisé"}, "défaut") == "Email déjà utilisé"


def test_extract_message_list_takes_first():
    assert extract_error_message({"message": ["email must be an email", "x"]}, "défaut") == "email must be an email"


def test_extract_message_fallbacks():
    assert extract_error_message(None, "défaut") == "défaut"
    assert extract_error_message({"message": []}, "défaut") == "défaut"
    assert extract_error_message({"message": 42}, "défaut") == "défaut"
    assert extract_error_message("boom", "défaut") == "défaut"


def test_message_for_uses_payload_or_default():
    err = ApiError("HTTP 400", status_code=400, payload={"message": "Transition invalide"})
    assert message_for(err, "défaut") == "Transition invalide"
    assert message_for(ApiError("réseau"), "défaut") == "défaut"
    assert message_for(RuntimeError("x"), "défaut") == "défaut"


def test_message_for_missing_organization():
    assert message_for(MissingOrganizationError(), "défaut") == "Impossible de déterminer l'organisation"
