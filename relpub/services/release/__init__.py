"""Release publish flow: config resolution, group filtering, dispatch."""
