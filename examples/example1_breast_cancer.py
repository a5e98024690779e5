"""
Example 1 – Breast Cancer (Binary Classification)
==================================================
Cuckoo Search wrapper selection on the Wisconsin Breast Cancer data.

Dataset : Wisconsin Breast Cancer (30 features, 2 classes, 569 samples)
Search  : 20 nests, 10 iterations, V2 transfer function
Fitness : 5-fold CV accuracy of a k-NN classifier
"""

from sklearn.datasets import load_breast_cancer
from sklearn.metrics import accuracy_score
from sklearn.model_selection import train_test_split
from sklearn.neighbors import KNeighborsClassifier
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from cuckoo_feature_select import CuckooSearchFeatureSelector
from cuckoo_feature_select.plot import plot_convergence, plot_selection_frequency

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
data = load_breast_cancer()
X, y = data.data, data.target
feature_names = data.feature_names.tolist()

X_train, X_test, y_train, y_test = train_test_split(
    X, y, test_size=0.2, random_state=42, stratify=y,
)

print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 2 classes")

# ---------------------------------------------------------------------------
# 2. Run the search
# ---------------------------------------------------------------------------
selector = CuckooSearchFeatureSelector(
    estimator=make_pipeline(StandardScaler(), KNeighborsClassifier()),
    population_size=20,
    max_iteration=10,
    cv=5,
    random_state=12345,
    verbose=2,
)
selector.fit(X_train, y_train, feature_names=feature_names)
print()
print(selector.summary())

# ---------------------------------------------------------------------------
# 3. Evaluate on held-out test set
# ---------------------------------------------------------------------------
clf = make_pipeline(StandardScaler(), KNeighborsClassifier())
clf.fit(selector.transform(X_train), y_train)
acc = accuracy_score(y_test, clf.predict(selector.transform(X_test)))
print(f"\nTest accuracy (k-NN on selected features): {acc:.4f}")

# ---------------------------------------------------------------------------
# 4. Visualise
# ---------------------------------------------------------------------------
plot_convergence(
    selector.history_,
    title="Breast Cancer – Cuckoo Search convergence",
    save_path="example1_convergence.png",
)
plot_selection_frequency(
    selector.history_,
    feature_names=feature_names,
    highlight=selector.selected_features_,
    title="Breast Cancer – feature selection frequency",
    save_path="example1_frequency.png",
)

print("Plots saved: example1_convergence.png, example1_frequency.png")
