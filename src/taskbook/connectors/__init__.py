"""Interactive front-ends that drive the task store."""
