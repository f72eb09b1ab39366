import attrs


@attrs.define(frozen=True)
class RestoreStateResult:
    loaded: int
    # Pending/paid reservations whose seats were re-marked as taken
    rehydrated: int
    swept: bool
    persisted: bool
