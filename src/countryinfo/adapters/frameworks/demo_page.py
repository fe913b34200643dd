"""Static HTML for the demo page served at ``/``."""

DEMO_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Country Info API</title>
  <style>
    body { font-family: system-ui, sans-serif; background: #eef2ff; margin: 0; }
    main { max-width: 56rem; margin: 3rem auto; padding: 0 1rem; }
    h1 { text-align: center; color: #1f2937; margin-bottom: 0.25rem; }
    p.lead { text-align: center; color: #4b5563; margin-bottom: 2rem; }
    .card { background: #fff; border-radius: 0.75rem; padding: 1.5rem;
            box-shadow: 0 4px 12px rgba(0, 0, 0, 0.08); }
    .row { display: flex; gap: 1rem; margin-bottom: 1rem; }
    .row label { flex: 1; font-size: 0.875rem; color: #374151; }
    select, button { width: 100%; padding: 0.5rem; margin-top: 0.25rem;
                     border-radius: 0.5rem; border: 1px solid #d1d5db; }
    button { background: #4f46e5; color: #fff; border: none; cursor: pointer; }
    button:disabled { background: #a5b4fc; }
    pre { background: #111827; color: #a7f3d0; padding: 1rem; border-radius: 0.5rem;
          overflow-x: auto; min-height: 4rem; }
    code.url { color: #4f46e5; }
  </style>
</head>
<body>
<main>
  <h1>Country Info API</h1>
  <p class="lead">Simple REST APIs to get country information</p>
  <div class="card">
    <div class="row">
      <label>Select API
        <select id="api">
          <option value="currency">Currency</option>
          <option value="animal">National Animal</option>
          <option value="capital">Capital City</option>
          <option value="exchange-rate">Exchange Rate (to INR)</option>
        </select>
      </label>
      <label>Select Country
        <select id="country">
          <option value="usa">USA</option>
          <option value="uk">UK</option>
          <option value="japan" selected>Japan</option>
          <option value="india">India</option>
          <option value="germany">Germany</option>
          <option value="france">France</option>
          <option value="canada">Canada</option>
          <option value="australia">Australia</option>
          <option value="china">China</option>
          <option value="brazil">Brazil</option>
          <option value="mexico">Mexico</option>
          <option value="south-korea">South Korea</option>
          <option value="russia">Russia</option>
          <option value="switzerland">Switzerland</option>
        </select>
      </label>
    </div>
    <p>Request: <code class="url" id="url"></code></p>
    <button id="send">Send Request</button>
    <pre id="result">Pick an API and a country, then send a request.</pre>
  </div>
</main>
<script>
  const api = document.getElementById("api");
  const country = document.getElementById("country");
  const url = document.getElementById("url");
  const send = document.getElementById("send");
  const result = document.getElementById("result");

  function currentUrl() {
    return "/api/" + api.value + "/" + country.value;
  }
  function refreshUrl() { url.textContent = "GET " + currentUrl(); }

  api.addEventListener("change", refreshUrl);
  country.addEventListener("change", refreshUrl);
  refreshUrl();

  send.addEventListener("click", async () => {
    send.disabled = true;
    result.textContent = "Loading...";
    try {
      const response = await fetch(currentUrl());
      const data = await response.json();
      result.textContent = response.status + "\\n" + JSON.stringify(data, null, 2);
    } catch (error) {
      result.textContent = JSON.stringify({ error: "Failed to fetch data" }, null, 2);
    } finally {
      send.disabled = false;
    }
  });
</script>
</body>
</html>
"""
