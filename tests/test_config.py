from ticket_desk.core.config import DEFAULT_DB_SERVICE, load_settings


def test_defaults_leave_credentials_unset(tmp_path):
    settings = load_settings(tmp_path / "missing.yaml", env={})
    assert settings.base_url is None
    assert settings.api_key is None
    assert settings.db_service == DEFAULT_DB_SERVICE
    assert settings.tickets_table == "tickets"
    assert settings.comments_table == "ticket_comments"


def test_yaml_file_then_env_then_overrides(tmp_path):
    path = tmp_path / "ticket_desk.yaml"
    path.write_text(
        "backend:\n"
        "  base_url: https://from-file.example.com/api/v2\n"
        "  db_service: filedb\n"
        "  tickets_table: support_tickets\n"
    )
    env = {"TICKETDESK_API_KEY": "env-key", "TICKETDESK_DB_SERVICE": "envdb"}
    settings = load_settings(path, env=env, tickets_table="override_tickets")
    assert settings.base_url == "https://from-file.example.com/api/v2"
    assert settings.api_key == "env-key"
    assert settings.db_service == "envdb"
    assert settings.tickets_table == "override_tickets"
