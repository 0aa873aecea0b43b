"""Immutable edit operations used by diagram editors."""

from .phases import (
    add_action,
    add_empty_phase,
    add_object,
    create_object,
    duplicate_phase,
    move_action,
    move_object,
    new_id,
    remove_action,
    remove_object,
    remove_phase,
    replace_phase,
    set_action_animation,
    set_ball_owner,
)

__all__ = [
    "add_action",
    "add_empty_phase",
    "add_object",
    "create_object",
    "duplicate_phase",
    "move_action",
    "move_object",
    "new_id",
    "remove_action",
    "remove_object",
    "remove_phase",
    "replace_phase",
    "set_action_animation",
    "set_ball_owner",
]
