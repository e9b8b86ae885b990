import numpy as np
from time import perf_counter
from sklearn.model_selection import train_test_split
from sklearn.metrics import mean_squared_error
from rtreepy import BinnedAttribute, ContinuousAttribute, NominalAttribute, RegressionTreeLearner

# Synthetic data: one continuous, one nominal and one binned feature
rng = np.random.default_rng(42)
n = 2000
x0 = rng.normal(size=n)
x1 = rng.integers(0, 5, size=n)
x2 = rng.integers(0, 16, size=n)
y = np.sin(2 * x0) + (x1 == 3) * 2.0 + 0.1 * x2 + rng.normal(scale=0.3, size=n)
X = np.column_stack([x0, x1, x2])
atts = [ContinuousAttribute(name="x0", index=0),
        NominalAttribute(name="x1", index=1, cardinality=5),
        BinnedAttribute(name="x2", index=2, n_bins=16)]

X_tr, X_te, y_tr, y_te = train_test_split(X, y, test_size=0.25, random_state=0)

for mode in ["a:0.01", "d:6", "l:32"]:
    reg = RegressionTreeLearner(mode=mode, random_state=0)
    t0 = perf_counter(); reg.fit(X_tr, y_tr, attributes=atts); dt = perf_counter() - t0
    mse = mean_squared_error(y_te, reg.predict(X_te))
    print(f"{mode:>7}: fit {dt:.3f} s, leaves={reg.get_n_leaves()}, depth={reg.get_depth()}, test MSE={mse:.4f}")

reg = RegressionTreeLearner(mode="d:3", random_state=0).fit(X_tr, y_tr, attributes=atts)
reg.print_tree()
try:
    reg.export_graphviz("quickstart_tree", format="dot")
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
