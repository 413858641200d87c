"""Stack three monthly series and print the composed baselines, extents and legend."""

import pandas as pd

from nicestack import DataFrameGroup, StackEngine, StackState, XDomain
from nicestack.utils.logging import configure_logging

configure_logging(level="DEBUG")

df = pd.DataFrame(
    {
        "month": [1, 2, 3, 4, 5, 6],
        "online": [12.0, 15.0, 11.0, 18.0, 21.0, 19.0],
        "store": [30.0, 28.0, 31.0, 27.0, 25.0, 26.0],
        "returns": [-3.0, -2.0, -4.0, -1.0, -2.0, -3.0],
    }
)

engine = StackEngine(
    state=StackState(hidable_stacks=True, y_axis_padding="10%", x_axis_padding=0.5),
    domain=XDomain((2, 5)),
    render_trigger=lambda: print("-- render requested --"),
)
for column in ("online", "store", "returns"):
    engine.stack(DataFrameGroup(df, key_col="month", value_col=column), column)

print(engine.compose().to_frame())
print(engine.extents())
for entry in engine.legendables():
    print(entry)

engine.legend_toggle("store")
print(engine.compose().to_frame())
print(engine.extents())
