from chipvm.common.hwconf import CYCLE_DELAY


class MachineSettings:
    cycle_delay: float
    trace: bool
    strict_key_up: bool

    def __init__(self):
        self.cycle_delay = CYCLE_DELAY
        self.trace = False
        self.strict_key_up = False  # EXA1 behaves as EX9E unless set

    def update(
        self,
        cycle_delay: float | None = None,
        trace: bool | None = None,
        strict_key_up: bool | None = None
    ):
        if cycle_delay is not None:
            self.cycle_delay = cycle_delay

        if trace is not None:
            self.trace = trace

        if strict_key_up is not None:
            self.strict_key_up = strict_key_up

        return self
