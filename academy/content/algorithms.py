# Fichier: academy/content/algorithms.py
"""Static descriptive content for every algorithm served by the catalog.

This is a content payload: entries are validated into ``AlgorithmRecord``
objects once, when the catalog is built, and are never mutated afterwards.
"""

LINEAR_REGRESSION_PY = """import numpy as np


class LinearRegressionFromScratch:
    def __init__(self, learning_rate=0.01, n_iterations=1000):
        self.learning_rate = learning_rate
        self.n_iterations = n_iterations
        self.weights = None
        self.bias = None
        self.cost_history = []

    def fit(self, X, y):
        n_samples, n_features = X.shape
        self.weights = np.zeros(n_features)
        self.bias = 0

        for _ in range(self.n_iterations):
            y_pred = np.dot(X, self.weights) + self.bias
            self.cost_history.append(np.mean((y - y_pred) ** 2))

            dw = (1 / n_samples) * np.dot(X.T, (y_pred - y))
            db = (1 / n_samples) * np.sum(y_pred - y)

            self.weights -= self.learning_rate * dw
            self.bias -= self.learning_rate * db

    def predict(self, X):
        return np.dot(X, self.weights) + self.bias
"""

LINEAR_REGRESSION_JS = """class LinearRegression {
    constructor(learningRate = 0.01, iterations = 1000) {
        this.learningRate = learningRate;
        this.iterations = iterations;
        this.weights = null;
        this.bias = 0;
    }

    predict(X) {
        return X.map(row =>
            row.reduce((sum, val, idx) => sum + val * this.weights[idx], 0) + this.bias
        );
    }
}
"""

NEURAL_NETWORK_PY = """import numpy as np


class NeuralNetwork:
    def __init__(self, layers, learning_rate=0.01):
        self.layers = layers
        self.learning_rate = learning_rate
        self.weights = []
        self.biases = []
        for i in range(len(layers) - 1):
            self.weights.append(np.random.randn(layers[i], layers[i + 1]) * np.sqrt(2.0 / layers[i]))
            self.biases.append(np.zeros((1, layers[i + 1])))

    def sigmoid(self, x):
        return 1 / (1 + np.exp(-np.clip(x, -500, 500)))

    def forward_propagation(self, X):
        self.activations = [X]
        for w, b in zip(self.weights, self.biases):
            self.activations.append(self.sigmoid(np.dot(self.activations[-1], w) + b))
        return self.activations[-1]
"""

K_MEANS_PY = """import numpy as np


class KMeans:
    def __init__(self, k=3, max_iters=100, tol=1e-4):
        self.k = k
        self.max_iters = max_iters
        self.tol = tol
        self.centroids = None
        self.labels = None

    def fit(self, X):
        self.centroids = X[np.random.choice(len(X), self.k, replace=False)]
        for _ in range(self.max_iters):
            old_centroids = self.centroids.copy()
            distances = np.linalg.norm(X[:, None] - self.centroids[None], axis=2)
            self.labels = distances.argmin(axis=1)
            self.centroids = np.array([X[self.labels == c].mean(axis=0) for c in range(self.k)])
            if np.all(np.abs(self.centroids - old_centroids) < self.tol):
                break
        return self
"""

LOGISTIC_REGRESSION_PY = """import numpy as np


def sigmoid(z):
    return 1 / (1 + np.exp(-z))


def fit(X, y, lr=0.1, epochs=1000):
    w = np.zeros(X.shape[1])
    for _ in range(epochs):
        p = sigmoid(X @ w)
        w -= lr * X.T @ (p - y) / len(y)
    return w
"""

DECISION_TREE_PY = """from sklearn.tree import DecisionTreeClassifier

model = DecisionTreeClassifier(criterion="entropy", max_depth=4)
model.fit(X_train, y_train)
print(model.score(X_test, y_test))
"""

Q_LEARNING_PY = """import numpy as np

Q = np.zeros((n_states, n_actions))
for episode in range(episodes):
    state = env.reset()
    done = False
    while not done:
        action = np.argmax(Q[state]) if np.random.rand() > epsilon else env.sample()
        next_state, reward, done = env.step(action)
        Q[state, action] += alpha * (reward + gamma * Q[next_state].max() - Q[state, action])
        state = next_state
"""


ALGORITHM_DATA = {
    "linear-regression": {
        "id": "linear-regression",
        "name": "Linear Regression",
        "category": "Machine Learning",
        "subcategory": "Supervised Learning",
        "difficulty": "Beginner",
        "description": "A fundamental algorithm for predicting continuous values",
        "long_description": (
            "Linear regression is a statistical method that models the relationship between a dependent "
            "variable and one or more independent variables by fitting a linear equation to observed data. "
            "It is one of the most important algorithms in machine learning for prediction and understanding "
            "relationships between variables."
        ),
        "time_to_complete": 120,
        "estimated_time": "2-3 hours",
        "prerequisites": ["Basic Statistics", "Linear Algebra", "Calculus"],
        "learning_objectives": [
            "Understand the mathematical foundation of linear regression",
            "Learn how to implement linear regression from scratch",
            "Apply linear regression to real-world datasets",
            "Evaluate model performance using various metrics",
            "Understand overfitting and regularization techniques",
        ],
        "applications": [
            "Predicting house prices based on features",
            "Stock market analysis and forecasting",
            "Medical diagnosis and treatment planning",
            "Marketing campaign effectiveness analysis",
            "Weather prediction and climate modeling",
        ],
        "visualization": {
            "type": "Interactive Graph",
            "config": {"type": "scatter", "show_line": True, "show_residuals": True, "show_cost_function": True},
            "steps": [
                {"id": 1, "description": "Initialize random weights and bias", "animation": "fadeIn"},
                {"id": 2, "description": "Plot data points on coordinate system", "animation": "scatter"},
                {"id": 3, "description": "Draw initial regression line", "animation": "drawLine"},
                {"id": 4, "description": "Calculate cost function (MSE)", "animation": "showCost"},
                {"id": 5, "description": "Apply gradient descent to optimize weights", "animation": "updateWeights"},
                {"id": 6, "description": "Update regression line position", "animation": "updateLine"},
                {"id": 7, "description": "Repeat until convergence", "animation": "loop"},
            ],
        },
        "code_examples": [
            {
                "language": "Python",
                "code": LINEAR_REGRESSION_PY,
                "explanation": (
                    "Linear regression built from scratch with gradient descent: initialization, "
                    "training loop and prediction."
                ),
            },
            {
                "language": "JavaScript",
                "code": LINEAR_REGRESSION_JS,
                "explanation": "JavaScript version of the prediction step with learned weights and bias.",
            },
        ],
        "mathematics": {
            "formulas": [
                "y = β₀ + β₁x₁ + β₂x₂ + ... + βₙxₙ + ε",
                "Cost Function: J(θ) = 1/(2m) * Σ(h(x⁽ⁱ⁾) - y⁽ⁱ⁾)²",
                "Gradient: ∂J/∂θⱼ = 1/m * Σ(h(x⁽ⁱ⁾) - y⁽ⁱ⁾) * x⁽ⁱ⁾",
                "Update Rule: θⱼ := θⱼ - α * ∂J/∂θⱼ",
            ],
            "concepts": [
                "Linear relationship between input and output variables",
                "Least squares method for finding optimal parameters",
                "Gradient descent optimization algorithm",
                "Cost function minimization (Mean Squared Error)",
                "Overfitting and regularization (Ridge, Lasso)",
                "Feature scaling and normalization",
                "Bias-variance tradeoff",
            ],
            "proofs": [
                "Derivation of normal equation for optimal weights",
                "Proof of gradient descent convergence",
                "Mathematical foundation of regularization techniques",
            ],
        },
        "related_algorithms": [
            {"id": "logistic-regression", "name": "Logistic Regression", "similarity": 85},
            {"id": "polynomial-regression", "name": "Polynomial Regression", "similarity": 90},
            {"id": "ridge-regression", "name": "Ridge Regression", "similarity": 92},
            {"id": "lasso-regression", "name": "Lasso Regression", "similarity": 88},
        ],
        "exercises": [
            {
                "id": "ex1",
                "title": "House Price Prediction",
                "difficulty": "Easy",
                "description": "Build a linear regression model to predict house prices based on size, location, and age.",
            },
            {
                "id": "ex2",
                "title": "Stock Price Analysis",
                "difficulty": "Medium",
                "description": "Create a multiple linear regression model to analyze stock price movements using various market indicators.",
            },
            {
                "id": "ex3",
                "title": "Regularization Comparison",
                "difficulty": "Hard",
                "description": "Compare different regularization techniques (Ridge, Lasso, Elastic Net) on a high-dimensional dataset.",
            },
        ],
        "resources": [
            {"type": "Research Paper", "title": "The Elements of Statistical Learning", "url": "https://web.stanford.edu/~hastie/ElemStatLearn/"},
            {"type": "Video Tutorial", "title": "Linear Regression - Andrew Ng", "url": "https://www.coursera.org/learn/machine-learning"},
            {"type": "Interactive Demo", "title": "Linear Regression Visualization", "url": "https://seeing-theory.brown.edu/regression-analysis/"},
        ],
        "rating": 4.8,
        "review_count": 1247,
        "last_updated": "2024-12-15",
        "tags": ["supervised-learning", "regression", "statistics", "fundamental"],
        "level": "Beginner",
        "popularity": 9,
        "completion_rate": 87,
    },
    "neural-networks": {
        "id": "neural-networks",
        "name": "Neural Networks",
        "category": "Deep Learning",
        "subcategory": "Artificial Neural Networks",
        "difficulty": "Intermediate",
        "description": "Learn the fundamentals of artificial neural networks and deep learning",
        "long_description": (
            "Neural networks are computing systems inspired by biological neural networks. They consist of "
            "interconnected nodes (neurons) that process information using a connectionist approach. This "
            "foundational deep learning algorithm is capable of learning complex patterns and representations from data."
        ),
        "time_to_complete": 300,
        "estimated_time": "5-6 hours",
        "prerequisites": ["Linear Algebra", "Calculus", "Statistics", "Python Programming"],
        "learning_objectives": [
            "Understand the structure and components of neural networks",
            "Learn forward and backward propagation algorithms",
            "Implement neural networks from scratch",
            "Apply activation functions and their derivatives",
            "Understand gradient descent and optimization techniques",
            "Recognize common neural network architectures",
        ],
        "applications": [
            "Image recognition and computer vision",
            "Natural language processing and translation",
            "Speech recognition and synthesis",
            "Medical diagnosis and drug discovery",
            "Autonomous vehicle navigation",
            "Financial market prediction",
        ],
        "visualization": {
            "type": "Interactive Network",
            "config": {"type": "network", "show_weights": True, "show_activations": True, "show_backprop": True},
            "steps": [
                {"id": 1, "description": "Initialize network with random weights", "animation": "networkInit"},
                {"id": 2, "description": "Input data flows through network layers", "animation": "forwardPass"},
                {"id": 3, "description": "Apply activation functions at each layer", "animation": "activation"},
                {"id": 4, "description": "Calculate output and compare with target", "animation": "outputCalc"},
                {"id": 5, "description": "Compute loss and gradients", "animation": "lossCalc"},
                {"id": 6, "description": "Backpropagate error through network", "animation": "backprop"},
                {"id": 7, "description": "Update weights using gradient descent", "animation": "weightUpdate"},
                {"id": 8, "description": "Repeat process for multiple epochs", "animation": "epochLoop"},
            ],
        },
        "code_examples": [
            {
                "language": "Python",
                "code": NEURAL_NETWORK_PY,
                "explanation": "A fully connected network with weight initialization and forward propagation.",
            }
        ],
        "mathematics": {
            "formulas": [
                "Forward Pass: a^(l) = σ(W^(l) * a^(l-1) + b^(l))",
                "Cost Function: J = 1/m * Σ(y - ŷ)²",
                "Backpropagation: δ^(l) = (W^(l+1))^T * δ^(l+1) ⊙ σ'(z^(l))",
                "Weight Update: W^(l) := W^(l) - α * δ^(l) * (a^(l-1))^T",
                "Bias Update: b^(l) := b^(l) - α * δ^(l)",
            ],
            "concepts": [
                "Universal approximation theorem",
                "Gradient descent and backpropagation",
                "Activation functions (ReLU, Sigmoid, Tanh)",
                "Weight initialization strategies",
                "Regularization techniques (Dropout, L1/L2)",
                "Batch normalization",
                "Vanishing and exploding gradients",
            ],
            "proofs": [
                "Derivation of backpropagation algorithm",
                "Universal approximation theorem proof",
                "Gradient descent convergence analysis",
            ],
        },
        "related_algorithms": [
            {"id": "cnn", "name": "Convolutional Neural Networks", "similarity": 85},
            {"id": "rnn", "name": "Recurrent Neural Networks", "similarity": 82},
            {"id": "lstm", "name": "Long Short-Term Memory", "similarity": 78},
            {"id": "transformer", "name": "Transformer Architecture", "similarity": 75},
        ],
        "exercises": [
            {
                "id": "ex1",
                "title": "XOR Problem",
                "difficulty": "Easy",
                "description": "Implement a neural network to solve the classic XOR problem that cannot be solved by a single perceptron.",
            },
            {
                "id": "ex2",
                "title": "MNIST Digit Recognition",
                "difficulty": "Medium",
                "description": "Build a neural network to classify handwritten digits using the MNIST dataset.",
            },
            {
                "id": "ex3",
                "title": "Custom Architecture Design",
                "difficulty": "Hard",
                "description": "Design and implement a custom neural network architecture for a specific problem domain.",
            },
        ],
        "resources": [
            {"type": "Book", "title": "Deep Learning by Ian Goodfellow", "url": "https://www.deeplearningbook.org/"},
            {"type": "Course", "title": "Neural Networks and Deep Learning", "url": "https://www.coursera.org/learn/neural-networks-deep-learning"},
            {"type": "Interactive Demo", "title": "TensorFlow Playground", "url": "https://playground.tensorflow.org/"},
        ],
        "rating": 4.7,
        "review_count": 892,
        "last_updated": "2024-12-20",
        "tags": ["deep-learning", "neural-networks", "backpropagation", "classification"],
        "level": "Intermediate",
        "popularity": 8,
        "completion_rate": 73,
    },
    "k-means": {
        "id": "k-means",
        "name": "K-Means Clustering",
        "category": "Machine Learning",
        "subcategory": "Unsupervised Learning",
        "difficulty": "Beginner",
        "description": "Learn the popular K-means clustering algorithm for data partitioning",
        "long_description": (
            "K-means clustering is an unsupervised learning algorithm that partitions data into k clusters. It "
            "works by iteratively assigning data points to the nearest cluster centroid and updating centroids "
            "based on the mean of assigned points. This algorithm is widely used for customer segmentation, "
            "image segmentation, and data compression."
        ),
        "time_to_complete": 150,
        "estimated_time": "2-3 hours",
        "prerequisites": ["Linear Algebra", "Statistics", "Distance Metrics"],
        "learning_objectives": [
            "Understand the K-means algorithm and its applications",
            "Learn how to choose the optimal number of clusters",
            "Implement K-means from scratch",
            "Apply K-means to real-world clustering problems",
            "Understand limitations and alternatives to K-means",
        ],
        "applications": [
            "Customer segmentation for marketing",
            "Image segmentation and compression",
            "Market research and consumer behavior analysis",
            "Gene sequencing and bioinformatics",
            "Data compression and dimensionality reduction",
            "Recommendation systems",
        ],
        "visualization": {
            "type": "Interactive Scatter Plot",
            "config": {"type": "scatter", "show_centroids": True, "show_clusters": True, "animate_updates": True},
            "steps": [
                {"id": 1, "description": "Initialize k random centroids", "animation": "initCentroids"},
                {"id": 2, "description": "Assign each point to nearest centroid", "animation": "assignPoints"},
                {"id": 3, "description": "Color points based on cluster assignment", "animation": "colorClusters"},
                {"id": 4, "description": "Calculate new centroid positions", "animation": "updateCentroids"},
                {"id": 5, "description": "Move centroids to new positions", "animation": "moveCentroids"},
                {"id": 6, "description": "Repeat until convergence", "animation": "converge"},
            ],
        },
        "code_examples": [
            {
                "language": "Python",
                "code": K_MEANS_PY,
                "explanation": "Lloyd's algorithm with random initialization and a convergence tolerance.",
            }
        ],
        "mathematics": {
            "formulas": [
                "Distance: d(p, c) = √(Σ(p_i - c_i)²)",
                "Centroid Update: c_k = (1/|S_k|) * Σ(x_i ∈ S_k)",
                "Objective Function: J = Σ(k=1 to K) Σ(x_i ∈ C_k) ||x_i - μ_k||²",
                "Silhouette Score: s(i) = (b(i) - a(i)) / max(a(i), b(i))",
            ],
            "concepts": [
                "Euclidean distance and similarity metrics",
                "Centroid-based clustering",
                "Lloyd's algorithm convergence",
                "Cluster validation metrics",
                "Elbow method for optimal k selection",
                "Silhouette analysis",
                "Initialization strategies (K-means++)",
            ],
            "proofs": [
                "Convergence proof of Lloyd's algorithm",
                "Time complexity analysis O(nkdi)",
                "Local optimality guarantees",
            ],
        },
        "related_algorithms": [
            {"id": "hierarchical-clustering", "name": "Hierarchical Clustering", "similarity": 75},
            {"id": "dbscan", "name": "DBSCAN", "similarity": 70},
            {"id": "gaussian-mixture", "name": "Gaussian Mixture Models", "similarity": 80},
            {"id": "spectral-clustering", "name": "Spectral Clustering", "similarity": 65},
        ],
        "exercises": [
            {
                "id": "ex1",
                "title": "Customer Segmentation",
                "difficulty": "Easy",
                "description": "Apply K-means to segment customers based on purchasing behavior and demographic data.",
            },
            {
                "id": "ex2",
                "title": "Image Color Quantization",
                "difficulty": "Medium",
                "description": "Use K-means to reduce the number of colors in an image for compression purposes.",
            },
            {
                "id": "ex3",
                "title": "Advanced Clustering Analysis",
                "difficulty": "Hard",
                "description": "Compare K-means with other clustering algorithms and analyze their performance on different datasets.",
            },
        ],
        "resources": [
            {"type": "Tutorial", "title": "K-Means Clustering in Python", "url": "https://scikit-learn.org/stable/modules/clustering.html#k-means"},
            {"type": "Research Paper", "title": "K-means++: The Advantages of Careful Seeding", "url": "https://theory.stanford.edu/~sergei/papers/kMeansPP-soda.pdf"},
            {"type": "Interactive Demo", "title": "K-Means Clustering Visualization", "url": "https://www.naftaliharris.com/blog/visualizing-k-means-clustering/"},
        ],
        "rating": 4.6,
        "review_count": 756,
        "last_updated": "2024-12-18",
        "tags": ["unsupervised-learning", "clustering", "partitioning", "centroid-based"],
        "level": "Beginner",
        "popularity": 8,
        "completion_rate": 82,
    },
    "logistic-regression": {
        "id": "logistic-regression",
        "name": "Logistic Regression",
        "category": "Machine Learning",
        "subcategory": "Classification",
        "difficulty": "Beginner",
        "description": "A classification algorithm that predicts the probability of an instance belonging to a given class",
        "long_description": (
            "Logistic regression passes a linear combination of features through the sigmoid function to "
            "obtain class probabilities, and is trained by maximising the likelihood of the observed labels."
        ),
        "time_to_complete": 45,
        "estimated_time": "45 min",
        "prerequisites": ["Linear Regression", "Probability"],
        "learning_objectives": [
            "Understand the sigmoid function and decision boundaries",
            "Derive the log-loss from maximum likelihood",
        ],
        "applications": ["Spam detection", "Credit scoring", "Churn prediction"],
        "code_examples": [
            {"language": "Python", "code": LOGISTIC_REGRESSION_PY, "explanation": "Batch gradient descent on the log-loss."}
        ],
        "mathematics": {
            "formulas": ["σ(z) = 1 / (1 + e^(-z))", "L = -Σ y log ŷ + (1 - y) log(1 - ŷ)"],
            "concepts": ["Sigmoid Function", "Binary Classification", "Maximum Likelihood"],
        },
        "related_algorithms": [{"id": "linear-regression", "name": "Linear Regression", "similarity": 85}],
        "exercises": [
            {
                "id": "ex1",
                "title": "Email Spam Filter",
                "difficulty": "Easy",
                "description": "Classify emails as spam or ham using bag-of-words features.",
            }
        ],
        "rating": 4.5,
        "review_count": 634,
        "last_updated": "2024-11-28",
        "tags": ["supervised-learning", "classification", "probability"],
        "level": "Beginner",
        "popularity": 7,
        "completion_rate": 84,
    },
    "decision-trees": {
        "id": "decision-trees",
        "name": "Decision Trees",
        "category": "Machine Learning",
        "subcategory": "Classification",
        "difficulty": "Intermediate",
        "description": "A tree-like model of decisions that predicts the value of a target variable by learning decision rules",
        "long_description": (
            "Decision trees split the feature space recursively, choosing at each node the split that "
            "maximises information gain, until leaves are pure enough to predict a class or value."
        ),
        "time_to_complete": 60,
        "estimated_time": "60 min",
        "prerequisites": ["Basic Probability", "Information Theory"],
        "learning_objectives": ["Compute entropy and information gain", "Control overfitting with pruning"],
        "applications": ["Medical triage", "Loan approval", "Feature importance analysis"],
        "code_examples": [
            {"language": "Python", "code": DECISION_TREE_PY, "explanation": "Entropy-based tree with a depth limit."}
        ],
        "mathematics": {
            "formulas": ["H(S) = -Σ p_i log₂ p_i", "IG(S, A) = H(S) - Σ |S_v|/|S| H(S_v)"],
            "concepts": ["Entropy", "Information Gain", "Pruning"],
        },
        "rating": 4.4,
        "review_count": 512,
        "last_updated": "2024-10-02",
        "tags": ["supervised-learning", "classification", "interpretability"],
        "level": "Intermediate",
        "popularity": 6,
        "completion_rate": 78,
    },
    "q-learning": {
        "id": "q-learning",
        "name": "Q-Learning",
        "category": "Reinforcement Learning",
        "subcategory": "Value-Based",
        "difficulty": "Advanced",
        "description": "A model-free reinforcement learning algorithm to learn the value of an action in a particular state",
        "long_description": (
            "Q-learning estimates the expected discounted return of every state-action pair by repeatedly "
            "applying the Bellman optimality update while an epsilon-greedy policy explores the environment."
        ),
        "time_to_complete": 150,
        "estimated_time": "2-3 hours",
        "prerequisites": ["Probability", "Markov Decision Processes", "Python Programming"],
        "learning_objectives": ["Formulate problems as MDPs", "Balance exploration and exploitation"],
        "applications": ["Game playing agents", "Robot navigation", "Resource scheduling"],
        "code_examples": [
            {"language": "Python", "code": Q_LEARNING_PY, "explanation": "Tabular Q-learning with epsilon-greedy exploration."}
        ],
        "mathematics": {
            "formulas": ["Q(s, a) ← Q(s, a) + α [r + γ max_a' Q(s', a') - Q(s, a)]"],
            "concepts": ["Q-Table", "Exploration vs Exploitation", "Reward Function", "Bellman Equation"],
        },
        "rating": 4.6,
        "review_count": 421,
        "last_updated": "2024-12-05",
        "tags": ["reinforcement-learning", "value-based", "bellman-equation"],
        "level": "Advanced",
        "popularity": 7,
        "completion_rate": 64,
    },
}
