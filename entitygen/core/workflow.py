from enum import Enum

class PipelineStage(str, Enum):
    CHECK_INPUT = "CHECK_INPUT"
    CHECK_NOSQL = "CHECK_NOSQL"
    READ_SNAPSHOTS = "READ_SNAPSHOTS"
    INITIALIZE_ENTITIES = "INITIALIZE_ENTITIES"
    FILL_ENTITIES = "FILL_ENTITIES"
    SUPPRESS_ENTITIES = "SUPPRESS_ENTITIES"
    DONE = "DONE"
