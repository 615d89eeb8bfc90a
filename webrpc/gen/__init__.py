"""Generator registry and JavaScript and TypeScript template helpers."""