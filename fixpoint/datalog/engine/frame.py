"""
Tabular interchange for relations using pandas.

Relations are exchanged as DataFrames with one object-typed column per
argument position. Column names come from a RelationSchema and default to
arg0..argN. Evaluation itself never touches a DataFrame.
"""
import logging
from collections.abc import Mapping
from typing import Iterable, Optional

import pandas as pd

from ..model.atom import Predicate
from ..model.schema import RelationSchema
from .database import Database, Relation, make_relation
from .errors import ArityMismatch

logger = logging.getLogger(__name__)


def empty_frame(schema: RelationSchema) -> pd.DataFrame:
    return pd.DataFrame({col: pd.Series(dtype="object") for col in schema.colnames})


def relation_to_frame(predicate: Predicate, relation: Iterable[tuple],
                      schema: Optional[RelationSchema] = None) -> pd.DataFrame:
    """Rows sorted so that equal relations give equal frames.

    Rows are ordered by the repr of their values, which stays total when a
    relation mixes value types.
    """
    schema = schema or RelationSchema.default(predicate)
    rows = sorted(relation, key=lambda row: tuple(map(repr, row)))
    if not rows:
        return empty_frame(schema)
    df = pd.DataFrame(rows, columns=list(schema.colnames))
    for col in schema.colnames:
        df[col] = df[col].astype(object)
    return df


def relation_from_frame(predicate: Predicate, df: pd.DataFrame,
                        schema: Optional[RelationSchema] = None) -> Relation:
    """
    Read a relation from `df`. With a schema, its columns are selected by
    name; without one, every column is used in order.
    """
    if schema is not None:
        missing = [col for col in schema.colnames if col not in df.columns]
        if missing:
            raise ArityMismatch(predicate, predicate.arity, len(df.columns),
                                context=f"frame missing columns {missing}")
        df = df[list(schema.colnames)]
    elif len(df.columns) != predicate.arity:
        raise ArityMismatch(predicate, predicate.arity, len(df.columns), context="frame columns")
    if predicate.arity == 0:
        return make_relation(predicate, [()] * min(len(df), 1))
    rows = df.itertuples(index=False, name=None)
    return make_relation(predicate, rows)


def database_to_frames(db: Database,
                       schemas: Optional[Mapping[Predicate, RelationSchema]] = None) -> dict[Predicate, pd.DataFrame]:
    schemas = schemas or {}
    return {pred: relation_to_frame(pred, rel, schemas.get(pred)) for pred, rel in db.items()}


def database_from_frames(frames: Mapping[Predicate, pd.DataFrame],
                         schemas: Optional[Mapping[Predicate, RelationSchema]] = None) -> Database:
    schemas = schemas or {}
    relations = {pred: relation_from_frame(pred, df, schemas.get(pred)) for pred, df in frames.items()}
    logger.debug(f"[FRAME] Loaded {sum(len(r) for r in relations.values())} facts "
                 f"from {len(relations)} frames")
    return Database(relations)
