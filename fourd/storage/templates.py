"""Static templates for the generated single-page tracker.

Placeholders have the form ``__NAME__`` and are filled by ``render``; the
JavaScript uses template literals, so ``$``-style substitution is avoided.
"""

from __future__ import annotations

import re
from typing import Dict

ICON_PATHS = [
    'icons/icon-72.png',
    'icons/icon-96.png',
    'icons/icon-128.png',
    'icons/icon-144.png',
    'icons/icon-152.png',
    'icons/icon-192.png',
    'icons/icon-384.png',
    'icons/icon-512.png',
    'icons/magnum-96.png',
    'icons/search-96.png',
    'icons/chart-96.png',
]

MANIFEST_ICONS = [
    {'src': 'icons/icon-192.png', 'sizes': '192x192', 'type': 'image/png'},
    {'src': 'icons/icon-512.png', 'sizes': '512x512', 'type': 'image/png'},
]

PRECACHE_PATHS = ['./', './index.html', './manifest.json']

DATA_EXTENSION = '.csv'

SEARCH_DEBOUNCE_MS = 300

TOP_N = 10

_PLACEHOLDER = re.compile(r'__([A-Z_]+)__')


def render(template: str, values: Dict[str, str]) -> str:
    """Fill ``__NAME__`` placeholders; an unknown name raises KeyError."""
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)


SERVICE_WORKER = """const CACHE_NAME = __CACHE_NAME__;
const CORE_ASSETS = __PRECACHE__;
const DATA_EXTENSION = __DATA_EXTENSION__;

self.addEventListener('install', e => {
  e.waitUntil(caches.open(CACHE_NAME).then(c => c.addAll(CORE_ASSETS)));
});

self.addEventListener('activate', e => e.waitUntil(clients.claim()));

self.addEventListener('fetch', e => {
  const url = new URL(e.request.url);
  if (url.pathname.endsWith(DATA_EXTENSION)) {
    // data: always try the network, refresh the cache, fall back to the cached copy
    e.respondWith(caches.open(CACHE_NAME).then(c =>
      fetch(e.request).then(r => {
        if (r.status === 200) c.put(e.request, r.clone());
        return r;
      }).catch(() => c.match(e.request))
    ));
    return;
  }
  e.respondWith(caches.match(e.request).then(r =>
    r || fetch(e.request).catch(() => {
      if (e.request.destination === 'document') return caches.match('./index.html');
    })
  ));
});
"""


INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<meta name="theme-color" content="__THEME_COLOR__">
<title>__TITLE__</title>
<link rel="manifest" href="manifest.json">
<script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
<style>
body{font-family:sans-serif;padding:20px;background:#f5f7fa;}
h1,h2{text-align:center;}
.controls{text-align:center;}
table{width:100%;border-collapse:collapse;margin:10px 0;}
th,td{border:1px solid #ccc;padding:6px;text-align:center;}
button{padding:10px;margin:5px;}
#charts{display:flex;flex-wrap:wrap;gap:20px;justify-content:center;}
canvas{background:white;border-radius:8px;padding:10px;}
</style>
</head>
<body>
<h1>__TITLE__</h1>
<div class="controls" id="companies"></div>
<div class="controls">
<input id="search" placeholder="Search number...">
<button id="export">Export CSV</button>
</div>

<h2 id="title">Select a company...</h2>
<table id="results"><tr><td colspan="6">No data</td></tr></table>

<h2>Charts &amp; Insights</h2>
<div id="charts">
  <canvas id="freqChart" width="400" height="300"></canvas>
</div>

<script>
const COMPANIES = __COMPANIES__;
const DEBOUNCE_MS = __DEBOUNCE_MS__;
const TOP_N = __TOP_N__;

// state.status: 'unloaded' | 'loaded' | 'filtered'
function createState(){
  return {status:'unloaded', company:null, query:'', records:[], visible:[], chart:null, timer:null};
}

function parseLine(line){
  const out=[];let cur='';let quoted=false;
  for(let i=0;i<line.length;i++){
    const ch=line[i];
    if(quoted){
      if(ch==='"'&&line[i+1]==='"'){cur+='"';i++;}
      else if(ch==='"'){quoted=false;}
      else cur+=ch;
    }else if(ch==='"'){quoted=true;}
    else if(ch===','){out.push(cur);cur='';}
    else cur+=ch;
  }
  out.push(cur);
  return out;
}

function parseCSV(text){
  const lines=text.trim().split(/\\r?\\n/).filter(l=>l.length);
  if(!lines.length) return [];
  const header=parseLine(lines.shift());
  return lines.map(l=>{
    const vals=parseLine(l);const obj={};
    header.forEach((h,i)=>obj[h]=vals[i]||'');
    obj.Special=obj.Special?obj.Special.split('|'):[];
    obj.Consolation=obj.Consolation?obj.Consolation.split('|'):[];
    return obj;
  });
}

async function fetchCSV(path){
  try{const res=await fetch(path);if(!res.ok)return [];return parseCSV(await res.text());}catch(e){return [];}
}

function numbersOf(d){return [d.First,d.Second,d.Third,...d.Special,...d.Consolation].filter(n=>n);}

async function loadResults(state,company){
  state.records=await fetchCSV(`./data/${company.key}.csv`);
  state.company=company;
  state.query='';
  state.status='loaded';
  document.getElementById('search').value='';
  document.getElementById('title').innerText=`${company.label.toUpperCase()} (${state.records.length})`;
  state.visible=state.records;
  renderTable(state);
  updateFreqChart(state);
}

function renderTable(state){
  const table=document.getElementById('results');
  table.innerHTML='<tr><th>Date</th><th>1st</th><th>2nd</th><th>3rd</th><th>Special</th><th>Consolation</th></tr>';
  state.visible.forEach(d=>{
    const row=table.insertRow();
    [d.Date,d.First,d.Second,d.Third,d.Special.join(', '),d.Consolation.join(', ')].forEach(v=>{row.insertCell().textContent=v;});
  });
}

function applyFilter(state,query){
  if(state.status==='unloaded') return;
  const q=query.trim().toLowerCase();
  state.query=q;
  state.status=q?'filtered':'loaded';
  state.visible=q?state.records.filter(d=>numbersOf(d).some(n=>n.toLowerCase().includes(q))):state.records;
  renderTable(state);
}

function debouncedSearch(state,query){
  clearTimeout(state.timer);
  state.timer=setTimeout(()=>applyFilter(state,query),DEBOUNCE_MS);
}

function csvField(f){return `"${String(f).replace(/"/g,'""')}"`;}

function exportCSV(state){
  if(state.status==='unloaded'||!state.visible.length) return;
  const rows=[['Date','1st','2nd','3rd','Special','Consolation'],
    ...state.visible.map(d=>[d.Date,d.First,d.Second,d.Third,d.Special.join('|'),d.Consolation.join('|')])];
  const csv=rows.map(r=>r.map(csvField).join(',')).join('\\n');
  const a=document.createElement('a');
  a.href=URL.createObjectURL(new Blob([csv],{type:'text/csv'}));
  a.download=`4D-${state.company.key}.csv`;
  a.click();
}

function topNumbers(records,limit){
  const freq=new Map();
  records.forEach(d=>numbersOf(d).forEach(n=>freq.set(n,(freq.get(n)||0)+1)));
  // Array.prototype.sort is stable: ties keep first-encounter order
  return [...freq.entries()].sort((a,b)=>b[1]-a[1]).slice(0,limit);
}

function updateFreqChart(state){
  const sorted=topNumbers(state.records,TOP_N);
  if(state.chart) state.chart.destroy();
  if(typeof Chart==='undefined') return;
  state.chart=new Chart(document.getElementById('freqChart'),{type:'bar',
    data:{labels:sorted.map(e=>e[0]),datasets:[{label:'Frequency',data:sorted.map(e=>e[1]),backgroundColor:'#007bff'}]},
    options:{plugins:{title:{display:true,text:`Top ${TOP_N} Frequency`}}}});
}

const appState=createState();
const bar=document.getElementById('companies');
COMPANIES.forEach(c=>{
  const b=document.createElement('button');
  b.textContent=c.label;
  b.addEventListener('click',()=>loadResults(appState,c));
  bar.appendChild(b);
});
document.getElementById('search').addEventListener('input',e=>debouncedSearch(appState,e.target.value));
document.getElementById('export').addEventListener('click',()=>exportCSV(appState));

if('serviceWorker' in navigator){navigator.serviceWorker.register('service-worker.js').catch(()=>{});}
window.addEventListener('load',()=>{if(COMPANIES.length) loadResults(appState,COMPANIES[0]);});
</script>
</body>
</html>
"""
