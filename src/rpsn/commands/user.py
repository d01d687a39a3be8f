"""``rpsn user`` -- space members."""

from __future__ import annotations

import typer

from rpsn.commands import (
    ACTIVITY_COLUMNS,
    USER_COLUMNS,
    data_of,
    done,
    open_client,
    show_record,
    show_records,
)

user_app = typer.Typer(no_args_is_help=True)

USER_FIELDS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Full name", "fullName"),
    ("Email", "email"),
    ("Role", "role"),
    ("Billing", "billingStatus"),
]


@user_app.command("list")
def user_list(ctx: typer.Context) -> None:
    """List users in the space."""
    from rpsn.api.endpoints import user

    with open_client(ctx) as client:
        data = data_of(user.list_users(client))
    if data is not None:
        show_records(data.users, USER_COLUMNS, "Users")


@user_app.command("get")
def user_get(ctx: typer.Context, user_id: int = typer.Argument(help="User ID.")) -> None:
    """Show one user."""
    from rpsn.api.endpoints import user

    with open_client(ctx) as client:
        data = data_of(user.get_user(client, user_id))
    if data is not None:
        show_record(data.user, USER_FIELDS)


@user_app.command("role")
def user_role(
    ctx: typer.Context,
    user_id: int = typer.Argument(help="User ID."),
    role: str = typer.Argument(help="New role."),
) -> None:
    """Change a user's role."""
    from rpsn.api.endpoints import user

    with open_client(ctx) as client:
        user.set_role(client, user_id, role)
        done(client, f"User {user_id} is now {role}.")


@user_app.command("payment")
def user_payment(
    ctx: typer.Context,
    user_id: int = typer.Argument(help="User ID."),
    payment_type: str = typer.Argument(help="Payment type."),
) -> None:
    """Change a user's payment type."""
    from rpsn.api.endpoints import user

    with open_client(ctx) as client:
        user.set_payment(client, user_id, payment_type)
        done(client, f"Payment type for user {user_id} set to {payment_type}.")


@user_app.command("activity")
def user_activity(ctx: typer.Context, user_id: int = typer.Argument(help="User ID.")) -> None:
    """Show a user's recent activity."""
    from rpsn.api.endpoints import user

    with open_client(ctx) as client:
        data = data_of(user.get_activity(client, user_id))
    if data is not None:
        show_records(data.activity, ACTIVITY_COLUMNS, "Activity")
