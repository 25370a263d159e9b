import sys
import os

import pytest

# project root = the repository checkout
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
BACKEND_ROOT = os.path.join(PROJECT_ROOT, "backend")

# Add PROJECT_ROOT and BACKEND_ROOT to sys.path
for path in [PROJECT_ROOT, BACKEND_ROOT]:
    if path not in sys.path:
        sys.path.insert(0, path)


@pytest.fixture
def train_batch():
    return [
        {"PassengerId": 1, "Sex": "male", "Age": 22, "Survived": 0},
        {"PassengerId": 2, "Sex": "female", "Age": 38, "Survived": 1},
    ]


@pytest.fixture
def test_batch():
    return [{"PassengerId": 3, "Sex": "male", "Age": 26}]


@pytest.fixture
def titanic_batches():
    """A small Titanic-shaped train/test split with gaps in Age, Cabin and Embarked."""
    train = [
        {"PassengerId": 1, "Survived": 0, "Pclass": 3, "Name": "Braund", "Sex": "male", "Age": 22.0, "SibSp": 1, "Parch": 0, "Ticket": "A/5 21171", "Fare": 7.25, "Cabin": None, "Embarked": "S"},
        {"PassengerId": 2, "Survived": 1, "Pclass": 1, "Name": "Cumings", "Sex": "female", "Age": 38.0, "SibSp": 1, "Parch": 0, "Ticket": "PC 17599", "Fare": 71.2833, "Cabin": "C85", "Embarked": "C"},
        {"PassengerId": 3, "Survived": 1, "Pclass": 3, "Name": "Heikkinen", "Sex": "female", "Age": 26.0, "SibSp": 0, "Parch": 0, "Ticket": "STON/O2. 3101282", "Fare": 7.925, "Cabin": None, "Embarked": "S"},
        {"PassengerId": 4, "Survived": 1, "Pclass": 1, "Name": "Futrelle", "Sex": "female", "Age": 35.0, "SibSp": 1, "Parch": 0, "Ticket": "113803", "Fare": 53.1, "Cabin": "C123", "Embarked": "S"},
        {"PassengerId": 5, "Survived": 0, "Pclass": 3, "Name": "Allen", "Sex": "male", "Age": 35.0, "SibSp": 0, "Parch": 0, "Ticket": "373450", "Fare": 8.05, "Cabin": None, "Embarked": "S"},
        {"PassengerId": 6, "Survived": 0, "Pclass": 3, "Name": "Moran", "Sex": "male", "Age": None, "SibSp": 0, "Parch": 0, "Ticket": "330877", "Fare": 8.4583, "Cabin": None, "Embarked": "Q"},
        {"PassengerId": 7, "Survived": 0, "Pclass": 1, "Name": "McCarthy", "Sex": "male", "Age": 54.0, "SibSp": 0, "Parch": 0, "Ticket": "17463", "Fare": 51.8625, "Cabin": "E46", "Embarked": "S"},
        {"PassengerId": 8, "Survived": 0, "Pclass": 3, "Name": "Palsson", "Sex": "male", "Age": 2.0, "SibSp": 3, "Parch": 1, "Ticket": "349909", "Fare": 21.075, "Cabin": None, "Embarked": "S"},
    ]
    test = [
        {"PassengerId": 892, "Pclass": 3, "Name": "Kelly", "Sex": "male", "Age": 34.5, "SibSp": 0, "Parch": 0, "Ticket": "330911", "Fare": 7.8292, "Cabin": None, "Embarked": "Q"},
        {"PassengerId": 893, "Pclass": 3, "Name": "Wilkes", "Sex": "female", "Age": 47.0, "SibSp": 1, "Parch": 0, "Ticket": "363272", "Fare": 7.0, "Cabin": None, "Embarked": "S"},
        {"PassengerId": 894, "Pclass": 2, "Name": "Myles", "Sex": "male", "Age": None, "SibSp": 0, "Parch": 0, "Ticket": "240276", "Fare": 9.6875, "Cabin": None, "Embarked": "Q"},
    ]
    return train, test
