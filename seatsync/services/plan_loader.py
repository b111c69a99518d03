"""
Seating plan loading and default snapshot construction
"""

import io
import json
import logging
import os
import secrets
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from seatsync.core.seating_plan import DEFAULT_SEATING_PLAN
from seatsync.schemas.seating import Guest, Seating, Table

logger = logging.getLogger(__name__)


class SeatingPlanError(ValueError):
    """Raised when a seating plan description cannot be used"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class PlanLoader:
    """Reads seating plan descriptions and builds the default snapshot"""

    REQUIRED_COLUMNS = ['table', 'category', 'name']

    @staticmethod
    def validate_plan(plan: Sequence[Dict[str, Any]]) -> Tuple[bool, List[str]]:
        """Validate table definitions: ids present and unique, guest names are strings"""
        errors = []
        seen = set()

        for position, entry in enumerate(plan):
            table_id = entry.get("id") if isinstance(entry, dict) else None
            if table_id is None or str(table_id).strip() == "":
                errors.append(f"Table definition {position + 1} has no id")
                continue

            table_id = str(table_id).strip()
            if table_id in seen:
                errors.append(f"Duplicate table id '{table_id}'")
            seen.add(table_id)

            guests = entry.get("guests", [])
            if not isinstance(guests, (list, tuple)):
                errors.append(f"Table '{table_id}' guests must be a list of names")
            elif any(not isinstance(name, str) for name in guests):
                errors.append(f"Table '{table_id}' has a guest name that is not text")

        return len(errors) == 0, errors

    @staticmethod
    def read_excel_plan(file_content: bytes) -> List[Dict[str, Any]]:
        """Read a plan spreadsheet with one row per guest.

        Columns: Table, Category, Name. Tables appear in the order of their
        first row; a row with an empty name declares an empty table.
        """
        df = pd.read_excel(io.BytesIO(file_content))

        column_mapping = {}
        for col in df.columns:
            col_lower = str(col).lower().strip()
            if col_lower in PlanLoader.REQUIRED_COLUMNS:
                column_mapping[col_lower] = col

        missing = [col for col in PlanLoader.REQUIRED_COLUMNS if col not in column_mapping]
        if missing:
            raise SeatingPlanError(
                "Seating plan spreadsheet is missing columns",
                [f"Missing required columns: {', '.join(missing)}"]
            )

        tables: Dict[str, Dict[str, Any]] = {}
        for _, row in df.iterrows():
            if pd.isna(row[column_mapping['table']]):
                continue
            table_id = str(row[column_mapping['table']]).strip()
            if table_id.endswith(".0"):
                table_id = table_id[:-2]

            category = row[column_mapping['category']]
            entry = tables.setdefault(table_id, {
                "id": table_id,
                "category": "" if pd.isna(category) else str(category).strip(),
                "guests": [],
            })

            name = row[column_mapping['name']]
            if pd.isna(name) or str(name).strip() == "":
                continue
            entry["guests"].append(str(name).strip())

        return list(tables.values())

    @staticmethod
    def load_plan(path: Optional[str] = None) -> List[Dict[str, Any]]:
        """Load a plan from a ``.json`` or ``.xlsx`` file, or the built-in plan"""
        if not path:
            return [dict(entry) for entry in DEFAULT_SEATING_PLAN]

        if not os.path.exists(path):
            raise SeatingPlanError(f"Seating plan file not found: {path}")

        if path.endswith((".xlsx", ".xls")):
            with open(path, "rb") as f:
                plan = PlanLoader.read_excel_plan(f.read())
        elif path.endswith(".json"):
            with open(path, "r", encoding="utf-8") as f:
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise SeatingPlanError(f"Invalid seating plan JSON: {e}") from e
            plan = data.get("tables", []) if isinstance(data, dict) else data
        else:
            raise SeatingPlanError(f"Unsupported seating plan format: {path}")

        logger.info(f"Loaded seating plan with {len(plan)} tables from {path}")
        return plan

    @staticmethod
    def build_seating(plan: Sequence[Dict[str, Any]], salt: Optional[str] = None) -> Seating:
        """Build the default snapshot, one guest record per name.

        Guest ids are ``<table id>-<position>-<salt>``; table ids are unique,
        so ids are unique across the whole snapshot, and the salt keeps them
        apart from ids produced by any other load.
        """
        valid, errors = PlanLoader.validate_plan(plan)
        if not valid:
            raise SeatingPlanError("Invalid seating plan", errors)

        salt = salt or secrets.token_hex(4)
        tables = []
        for entry in plan:
            table_id = str(entry["id"]).strip()
            guests = tuple(
                Guest(id=f"{table_id}-{idx}-{salt}", name=name)
                for idx, name in enumerate(entry.get("guests", []))
            )
            tables.append(Table(
                id=table_id,
                category=str(entry.get("category", "")),
                guests=guests,
                note=entry.get("note"),
            ))

        return Seating(tables=tuple(tables))


def default_seating_factory(plan_path: Optional[str] = None):
    """Return a callable producing a fresh default snapshot from the plan at ``plan_path``"""
    plan = PlanLoader.load_plan(plan_path)

    def factory() -> Seating:
        return PlanLoader.build_seating(plan)

    return factory
