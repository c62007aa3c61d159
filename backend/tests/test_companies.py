class TestCompanies:
    def _seed(self, make_job):
        make_job(company="Acme Corp", location="Berlin, Germany", category="Engineering",
                 tags=["Software"], created_at="2024-01-01T00:00:00.000000Z")
        make_job(company="Acme Corp", location="Munich, Germany", category="Design",
                 tags=["Product"], created_at="2024-01-05T00:00:00.000000Z")
        make_job(company="Globex", location="", category="Sales", tags=[],
                 created_at="2024-01-03T00:00:00.000000Z")

    def test_groups_jobs_by_company(self, client, make_job):
        self._seed(make_job)
        r = client.get("/companies")
        assert r.status_code == 200
        companies = r.json()["data"]
        assert [c["name"] for c in companies] == ["Acme Corp", "Globex"]

        acme, globex = companies
        assert acme["open_jobs"] == 2
        assert acme["industry"] == "Product"
        assert acme["location"] == "Munich"
        assert acme["categories"] == ["Design", "Engineering"]
        assert acme["description"] == "Leading Product company building innovative solutions."
        assert globex["open_jobs"] == 1
        assert globex["industry"] == "Technology"
        assert globex["location"] == "Remote"

    def test_view_is_stable_across_requests(self, client, make_job):
        self._seed(make_job)
        assert client.get("/companies").json() == client.get("/companies").json()

    def test_filters(self, client, make_job):
        self._seed(make_job)
        r = client.get("/companies", params={"search": "glob"})
        assert [c["name"] for c in r.json()["data"]] == ["Globex"]
        r = client.get("/companies", params={"industry": "prod"})
        assert [c["name"] for c in r.json()["data"]] == ["Acme Corp"]
        r = client.get("/companies", params={"location": "remote"})
        assert [c["name"] for c in r.json()["data"]] == ["Globex"]

    def test_company_detail(self, client, make_job):
        self._seed(make_job)
        r = client.get("/companies/acme corp")
        assert r.status_code == 200
        data = r.json()["data"]
        assert data["name"] == "Acme Corp"
        assert [j["category"] for j in data["jobs"]] == ["Design", "Engineering"]

    def test_company_detail_not_found(self, client, make_job):
        self._seed(make_job)
        r = client.get("/companies/Initech")
        assert r.status_code == 404
        assert r.json()["message"] == "Company not found"

    def test_no_jobs_means_no_companies(self, client):
        assert client.get("/companies").json()["data"] == []


class TestCategories:
    def test_category_counts(self, client, make_job):
        make_job(category="Design")
        make_job(category="Sales")
        make_job(category="Design")
        make_job(category=None)
        r = client.get("/categories")
        assert r.status_code == 200
        assert r.json()["data"] == [
            {"name": "Design", "count": 2},
            {"name": "Sales", "count": 1},
        ]


class TestCompanyNameNormalization:
    def _seed(self, make_job):
        make_job(company="acme", created_at="2024-01-01T00:00:00.000000Z")
        make_job(company="Acme ", created_at="2024-01-02T00:00:00.000000Z")

    def test_list_merges_case_and_whitespace_variants(self, client, make_job):
        self._seed(make_job)
        companies = client.get("/companies").json()["data"]
        assert [(c["name"], c["open_jobs"]) for c in companies] == [("Acme", 2)]

    def test_list_and_detail_agree(self, client, make_job):
        self._seed(make_job)
        listed = client.get("/companies").json()["data"][0]
        for name in ("Acme", "ACME", "acme"):
            detail = client.get(f"/companies/{name}").json()["data"]
            assert detail["name"] == listed["name"]
            assert detail["open_jobs"] == listed["open_jobs"] == len(detail["jobs"])
