"""Line-editing completion: word breaking, quoting and filename lookup."""
