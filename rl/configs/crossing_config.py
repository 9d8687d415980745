"""
Training configuration for the crossing environment
Reward shaping variants, algorithm hyperparameters and run settings
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "dt": 1/30,
    "max_steps": 1800,  # 60 seconds at 30 FPS
    "k_enemies": 5,
    "m_treats": 3,
    "enemy_count": 3,
    "max_speed": 200.0,
    "min_speed": 100.0,
    "treat_count": 1,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (balanced)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced reward shaping",
    "R_LEVEL": 5.0,      # Reward for reaching the water
    "R_TREAT": 1.0,      # Reward for collecting a treat
    "R_ADVANCE": 0.2,    # Reward per new row reached in a crossing
    "R_HIT": 1.0,        # Penalty for being hit by an enemy
    "R_TIME": 0.001,     # Small time penalty
}

# Reward Config 2: CAUTIOUS (avoid the bugs above all)
REWARD_CONFIG_CAUTIOUS = {
    "name": "cautious",
    "description": "Higher hit penalty, smaller shaping reward",
    "R_LEVEL": 5.0,
    "R_TREAT": 0.5,
    "R_ADVANCE": 0.1,
    "R_HIT": 3.0,        # MUCH higher hit penalty - encourages waiting for gaps
    "R_TIME": 0.0005,
}

# Reward Config 3: COLLECTOR (detour for treats)
REWARD_CONFIG_COLLECTOR = {
    "name": "collector",
    "description": "Treats worth almost as much as crossing",
    "R_LEVEL": 3.0,
    "R_TREAT": 2.5,      # MUCH higher treat reward
    "R_ADVANCE": 0.2,
    "R_HIT": 1.0,
    "R_TIME": 0.002,     # Higher time penalty - encourage action
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "cautious": REWARD_CONFIG_CAUTIOUS,
    "collector": REWARD_CONFIG_COLLECTOR,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
