#!/usr/bin/env python3
"""
Seed sample blog posts and projects through the API (login + POST), no direct DB access.
Useful after a fresh deploy to check the admin flow end to end.
  python scripts/seed_content.py
  python scripts/seed_content.py --posts 10 --projects 4 --base-url http://localhost:8000/api
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api"

TOPICS = [
    "Kubernetes", "Terraform", "GitHub Actions", "Docker", "Prometheus",
    "Grafana", "Ansible", "AWS", "Helm", "ArgoCD", "Linux", "Nginx",
]

TAGS = ["devops", "cloud", "ci-cd", "kubernetes", "monitoring", "automation", "linux"]

PARAGRAPH = (
    "This post walks through a practical setup used in production, the trade-offs that came up "
    "along the way, and the small scripts that made the workflow repeatable for the whole team."
)


def sample_post(i: int) -> dict:
    topic = random.choice(TOPICS)
    return {
        "title": f"Getting started with {topic} (part {i + 1})",
        "content": "\n\n".join(f"<p>{PARAGRAPH}</p>" for _ in range(random.randint(3, 12))),
        "tags": random.sample(TAGS, k=random.randint(1, 3)),
        "published": random.random() > 0.3,
    }


def sample_project(i: int) -> dict:
    stack = random.sample(TOPICS, k=random.randint(2, 4))
    return {
        "title": f"{stack[0]} platform {i + 1}",
        "description": f"Infrastructure project built with {', '.join(stack)}.",
        "content": PARAGRAPH,
        "technologies": stack,
        "github_url": f"https://github.com/example/project-{i + 1}",
        "published": True,
    }


def main():
    ap = argparse.ArgumentParser(description="Seed blog posts and projects via API")
    ap.add_argument("--posts", type=int, default=6)
    ap.add_argument("--projects", type=int, default=3)
    ap.add_argument("--username", default="admin")
    ap.add_argument("--password", default="admin123")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    errors = []
    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        r = client.post("/auth/login", json={"username": args.username, "password": args.password})
        if r.status_code != 200:
            print(f"Login failed: {r.status_code} {r.text[:200]}")
            raise SystemExit(1)
        headers = {"Authorization": f"Bearer {r.json()['access_token']}"}

        created_posts = 0
        for i in range(args.posts):
            r = client.post("/blog/admin", headers=headers, json=sample_post(i))
            if r.status_code == 201:
                created_posts += 1
            else:
                errors.append(f"Post {i + 1}: {r.status_code} {r.text[:80]}")

        created_projects = 0
        for i in range(args.projects):
            r = client.post("/projects/admin", headers=headers, json=sample_project(i))
            if r.status_code == 201:
                created_projects += 1
            else:
                errors.append(f"Project {i + 1}: {r.status_code} {r.text[:80]}")

    print(f"Done. Posts created: {created_posts}, projects created: {created_projects}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)


if __name__ == "__main__":
    main()
